"""Access helpers for extractor tag groups.

Raw tag data is a mapping of tag-group name ("EXIF", "QuickTime", "Composite",
...) to a mapping of tag name to value, plus a few top-level entries such as
``SourceFile``. Missing groups and tags are normal and always tolerated.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional

RawTagData = Mapping[str, Any]

# Top-level entries in extractor output that are not tag groups
TOP_LEVEL_KEYS = frozenset({"SourceFile"})

_EMPTY: Mapping[str, Any] = {}


def is_present(value: Any) -> bool:
    """Whether a tag value counts as "set" in a priority chain."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)) and not value:
        return False
    return True


def tag_group(raw: RawTagData, group: str) -> Mapping[str, Any]:
    """Return a tag group, or an empty mapping when it is absent."""
    value = raw.get(group)
    return value if isinstance(value, Mapping) else _EMPTY


def tag_value(raw: RawTagData, group: str, name: str) -> Any:
    """Return a single tag value, or None when the group or tag is absent."""
    return tag_group(raw, group).get(name)


def first_present(lookups: Iterable[Callable[[], Any]]) -> Any:
    """Evaluate lookups in order and return the first present value.

    Lookups after the first hit are never called.
    """
    for lookup in lookups:
        value = lookup()
        if is_present(value):
            return value
    return None


def first_tag_value(raw: RawTagData, sources: Iterable[tuple[str, str]]) -> Any:
    """Return the first present value among ``(group, tag)`` sources."""
    return first_present(
        (lambda group=group, name=name: tag_value(raw, group, name)) for group, name in sources
    )


def source_file(raw: RawTagData) -> Optional[str]:
    """Return the path the extractor recorded for this file, if any."""
    value = raw.get("SourceFile")
    return value if isinstance(value, str) and value else None


def group_tags(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Convert extractor output into nested tag groups.

    Accepts both flat ``"Group:Tag"`` keys (``exiftool -G``) and already
    grouped objects (``exiftool -g``). Keys without a group prefix stay at
    the top level.

    Args:
        flat: One per-file object from the extractor

    Returns:
        Nested RawTagData
    """
    grouped: dict[str, Any] = {}
    for key, value in flat.items():
        if key in TOP_LEVEL_KEYS:
            grouped[key] = value
        elif isinstance(value, Mapping):
            grouped.setdefault(key, {}).update(value)
        elif ":" in key:
            group, _, name = key.partition(":")
            grouped.setdefault(group, {})[name] = value
        else:
            grouped[key] = value
    return grouped
