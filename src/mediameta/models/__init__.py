"""Data models for mediameta."""

from mediameta.models.record import NormalizedRecord
from mediameta.models.sidecar import LegacySidecar

__all__ = ["LegacySidecar", "NormalizedRecord"]
