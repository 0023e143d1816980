"""Base HTTP client for third-party provider integrations.

Provides a base class for provider clients with:
- Connection pooling
- Retry logic with exponential backoff for transport failures
- Request/response logging and metrics
- Uniform error mapping to ExternalServiceException
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from video_service.core.exceptions import ExternalServiceException
from video_service.infra.metrics.tracking import track_external_call
from video_service.utils.retry import RetryError, retry

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class BaseHTTPClient:
    """Base HTTP client for provider APIs.

    Transport errors are retried; HTTP error statuses are not. Any failure
    that survives the retries is raised as ``ExternalServiceException``
    tagged with the provider name.

    Example:
        class MediaProcessingClient(BaseHTTPClient):
            provider = "media"

            async def get_asset(self, asset_id: str) -> dict:
                return await self.get(f"/video/v1/assets/{asset_id}")
    """

    provider = "external"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        auth: httpx.Auth | tuple[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: Base URL for the API.
            timeout: Request timeout in seconds.
            headers: Default headers to include in all requests.
            auth: Optional httpx authentication (e.g. basic auth tuple).
            transport: Optional transport override (``httpx.MockTransport`` in tests).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers or {},
            auth=auth,
            transport=transport,
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=100,
            ),
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self.client.aclose()

    async def __aenter__(self) -> BaseHTTPClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def get(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("POST", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> dict[str, Any]:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method.
            path: Path relative to ``base_url``.
            operation: Metric label; defaults to ``"{method} {path}"``.
            **kwargs: Passed to ``httpx.AsyncClient.request`` (json, params, headers).

        Returns:
            Decoded JSON object, or an empty dict for empty responses.

        Raises:
            ExternalServiceException: On HTTP error status or exhausted retries.
        """
        operation = operation or f"{method} {path}"
        started = time.perf_counter()
        try:
            response = await self._send(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            track_external_call(self.provider, operation, "error", time.perf_counter() - started)
            logger.warning(
                f"{self.provider} request failed with status {e.response.status_code}",
                extra={
                    "provider": self.provider,
                    "operation": operation,
                    "status_code": e.response.status_code,
                },
            )
            raise ExternalServiceException(
                detail=f"{self.provider} provider returned {e.response.status_code}",
                service=self.provider,
                extra={"operation": operation, "status_code": e.response.status_code},
            ) from e
        except (RetryError, httpx.HTTPError) as e:
            track_external_call(self.provider, operation, "error", time.perf_counter() - started)
            logger.warning(
                f"{self.provider} request failed",
                extra={"provider": self.provider, "operation": operation, "error": str(e)},
            )
            raise ExternalServiceException(
                detail=f"{self.provider} provider is unreachable",
                service=self.provider,
                extra={"operation": operation},
            ) from e

        duration = time.perf_counter() - started
        track_external_call(self.provider, operation, "success", duration)
        logger.info(
            f"{method} response from {self.provider}",
            extra={
                "provider": self.provider,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration * 1000,
            },
        )

        if not response.content:
            return {}
        return response.json()

    @retry(
        max_attempts=3,
        initial_delay=0.5,
        max_delay=10.0,
        exceptions=RETRYABLE_ERRORS,
    )
    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.info(
            f"{method} request to {self.base_url}{path}",
            extra={"provider": self.provider, "path": path},
        )
        return await self.client.request(method, path, **kwargs)
