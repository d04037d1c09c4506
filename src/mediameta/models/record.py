"""Normalized media record model."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional


@dataclass(frozen=True)
class NormalizedRecord:
    """Canonical metadata for a single photo or video."""

    date: int  # Creation date, epoch milliseconds
    caption: Optional[str] = None
    keywords: tuple[str, ...] = ()
    video: bool = False
    animated: bool = False
    rating: int = 0
    favourite: bool = False
    width: Optional[int] = None
    height: Optional[int] = None
    # Merged tag snapshot, only when embedding; read-only and left out of the hash
    exif: Optional[Mapping[str, Any]] = field(default=None, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "keywords", tuple(self.keywords))
        if self.exif is not None:
            object.__setattr__(self, "exif", MappingProxyType(dict(self.exif)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        The ``exif`` key is only present when a snapshot was embedded.
        """
        out: dict[str, Any] = {
            "date": self.date,
            "caption": self.caption,
            "keywords": list(self.keywords),
            "video": self.video,
            "animated": self.animated,
            "rating": self.rating,
            "favourite": self.favourite,
            "width": self.width,
            "height": self.height,
        }
        if self.exif is not None:
            out["exif"] = dict(self.exif)
        return out

    def __str__(self) -> str:
        """Human-readable representation."""
        kind = "video" if self.video else ("animation" if self.animated else "photo")
        size = f" {self.width}x{self.height}" if self.width and self.height else ""
        caption = f" '{self.caption}'" if self.caption else ""
        return f"{kind}{size}{caption} (date={self.date}, rating={self.rating})"
