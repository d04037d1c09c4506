"""Metadata resolution components for mediameta.

This package contains modules for reading extractor tags and legacy
sidecars, and resolving them into one normalized record per file.
"""

from mediameta.metadata.resolver import MetadataResolver, resolve

__all__ = ["MetadataResolver", "resolve"]
