"""Third-party provider clients."""

from video_service.infra.external.base_client import BaseHTTPClient
from video_service.infra.external.media import Asset, DirectUpload, MediaProcessingClient
from video_service.infra.external.storage import FileStorageClient
from video_service.infra.external.workflow import WorkflowClient, WorkflowRun

__all__ = [
    "Asset",
    "BaseHTTPClient",
    "DirectUpload",
    "FileStorageClient",
    "MediaProcessingClient",
    "WorkflowClient",
    "WorkflowRun",
]
