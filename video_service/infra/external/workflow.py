"""Client for triggering background workflows (Upstash Workflow over QStash).

A workflow run is started by publishing its JSON body to the queue with the
handler URL as destination. The queue then calls the handler (and retries it)
independently of this request.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import httpx
from pydantic import BaseModel

from video_service.core.settings.workflow import WorkflowSettings
from video_service.infra.external.base_client import BaseHTTPClient

logger = logging.getLogger(__name__)


class WorkflowRun(BaseModel):
    workflow_run_id: str
    message_id: str | None = None


class WorkflowClient(BaseHTTPClient):
    """Background workflow trigger."""

    provider = "workflow"

    def __init__(
        self,
        settings: WorkflowSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        super().__init__(
            base_url=settings.base_url,
            timeout=settings.timeout,
            headers={"Authorization": f"Bearer {settings.token.get_secret_value()}"},
            transport=transport,
        )

    async def trigger(self, name: str, body: dict[str, Any]) -> WorkflowRun:
        """Start a run of the named workflow.

        Args:
            name: Workflow handler name (``title``, ``description``, ``thumbnail``).
            body: JSON body delivered to the handler.

        Returns:
            The run id assigned to this trigger.
        """
        run_id = f"wfr_{uuid.uuid4().hex}"
        destination = self.settings.workflow_url(name)
        response = await self.post(
            f"/v2/publish/{destination}",
            json=body,
            headers={
                "Upstash-Method": "POST",
                "Upstash-Retries": str(self.settings.retries),
                "Upstash-Workflow-Init": "true",
                "Upstash-Workflow-RunId": run_id,
            },
            operation=f"trigger_{name}",
        )
        logger.info(
            "Workflow triggered",
            extra={"workflow": name, "workflow_run_id": run_id, "destination": destination},
        )
        return WorkflowRun(workflow_run_id=run_id, message_id=response.get("messageId"))
