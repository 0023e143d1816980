"""Prometheus metrics registry and tracking helpers."""

from video_service.infra.metrics.prometheus import REGISTRY

__all__ = ["REGISTRY"]
