"""Picasa.ini sidecar support.

Picasa keeps one INI file per folder, with a section per image::

    [Picasa]
    name=Holidays

    [IMG_0001.jpg]
    caption=Sunset over the bay
    keywords=beach,sunset
    star=yes
"""

import configparser
from pathlib import Path
from typing import Optional

import structlog

from mediameta.models.sidecar import LegacySidecar

logger = structlog.get_logger(__name__)

# Folder-level sections, not images
FOLDER_SECTIONS = frozenset({"Picasa", "Contacts", "Contacts2", "encoding"})


def parse_picasa_ini(text: str) -> dict[str, LegacySidecar]:
    """Parse Picasa.ini content into per-file sidecars.

    Args:
        text: Content of a Picasa.ini file

    Returns:
        Dict mapping file names to their sidecar

    Raises:
        ValueError: If the content is not valid INI
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        parser.read_string(text.lstrip("\ufeff"))
    except configparser.Error as e:
        raise ValueError(f"Invalid Picasa.ini: {e}") from e

    sidecars: dict[str, LegacySidecar] = {}
    for section in parser.sections():
        if section in FOLDER_SECTIONS:
            continue
        values = parser[section]
        sidecars[section] = LegacySidecar(
            caption=values.get("caption"),
            keywords=values.get("keywords"),
            star=values.get("star"),
        )

    logger.debug("Parsed Picasa.ini", file_count=len(sidecars))
    return sidecars


def find_sidecar(sidecars: dict[str, LegacySidecar], filename: str) -> Optional[LegacySidecar]:
    """Look up the sidecar for a file name.

    Exact match first, then a case-insensitive match.
    """
    if filename in sidecars:
        return sidecars[filename]

    lowered = filename.lower()
    for name, sidecar in sidecars.items():
        if name.lower() == lowered:
            return sidecar
    return None


def sidecar_for_file(
    sidecars: dict[str, LegacySidecar], folder: str | Path, file_path: str | Path
) -> Optional[LegacySidecar]:
    """Look up a file's sidecar from the Picasa.ini of ``folder``.

    Picasa.ini only annotates files directly in its own folder, so files
    elsewhere (including same-named files in subfolders) get None. Relative
    paths are taken from the current directory.

    Args:
        sidecars: Parsed Picasa.ini of ``folder``
        folder: Directory holding the Picasa.ini
        file_path: Path of the media file, as recorded by the extractor

    Returns:
        LegacySidecar, or None if the file isn't annotated
    """
    path = Path(file_path)
    if path.resolve().parent != Path(folder).resolve():
        return None
    return find_sidecar(sidecars, path.name)
