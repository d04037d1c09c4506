"""Reader for metadata extractor (exiftool) JSON output."""

import json

import structlog

from mediameta.metadata.tags import RawTagData, group_tags, source_file

logger = structlog.get_logger(__name__)


def parse_exiftool_json(document: str | bytes | list) -> dict[str, RawTagData]:
    """Parse ``exiftool -json -G`` (or ``-g``) output into per-file tag groups.

    Args:
        document: JSON text, or the already-decoded list of per-file objects

    Returns:
        Dict mapping each SourceFile to its nested tag groups

    Raises:
        ValueError: If the document is not a JSON list of objects
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid exiftool JSON: {e}") from e

    if not isinstance(document, list):
        raise ValueError("exiftool JSON must be a list of per-file objects")

    files: dict[str, RawTagData] = {}
    for idx, entry in enumerate(document):
        if not isinstance(entry, dict):
            raise ValueError(f"exiftool entry {idx} is not an object")

        raw_tags = group_tags(entry)
        path = source_file(raw_tags)
        if path is None:
            logger.warning("Skipping exiftool entry without SourceFile", index=idx)
            continue
        files[path] = raw_tags

    logger.debug("Parsed exiftool output", file_count=len(files))
    return files

