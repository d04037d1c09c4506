"""Legacy photo-organizer sidecar model."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class LegacySidecar:
    """Per-file annotations from a legacy organizer (Picasa).

    Every field is optional; absent annotations are ``None``.
    """

    caption: Optional[str] = None
    keywords: Optional[str] = None  # Comma-separated
    star: Optional[str] = None  # "yes" marks a favourite

    @classmethod
    def from_mapping(cls, data: Any) -> Optional["LegacySidecar"]:
        """Build a sidecar from a loosely-typed record.

        Args:
            data: Anything; only mappings carry sidecar data

        Returns:
            LegacySidecar, or None when ``data`` is not a mapping
        """
        if isinstance(data, LegacySidecar):
            return data
        if not isinstance(data, Mapping):
            return None
        return cls(
            caption=_optional_str(data.get("caption")),
            keywords=_optional_str(data.get("keywords")),
            star=_optional_str(data.get("star")),
        )


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
