"""Background workflow trigger settings (Upstash Workflow over QStash).

Environment variables use WORKFLOW_ prefix.
Example: WORKFLOW_TOKEN=..., WORKFLOW_CALLBACK_BASE_URL=https://videos.example.com
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Workflow trigger configuration.

    Attributes:
        base_url: Message-queue API used to start workflow runs.
        token: Bearer token for the queue API.
        callback_base_url: Public base URL of the workflow handlers; each run is
            delivered to ``{callback_base_url}/api/videos/workflows/{name}``.
        retries: Delivery retries requested for every triggered run.
    """

    base_url: str = Field(default="https://qstash.upstash.io", description="Queue API base URL")
    token: SecretStr = Field(default=SecretStr(""), description="Queue API bearer token")
    callback_base_url: str = Field(
        default="http://localhost:3000",
        description="Public base URL where workflow handlers are served",
    )
    retries: int = Field(default=3, ge=0, le=10, description="Delivery retries per run")
    timeout: float = Field(default=15.0, ge=1.0, le=120.0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    def workflow_url(self, name: str) -> str:
        """Build the handler URL for a named workflow."""
        return f"{self.callback_base_url.rstrip('/')}/api/videos/workflows/{name}"
