"""Metadata resolver that picks the best value per field from multiple sources."""

import re
from collections.abc import Mapping
from typing import Any, Optional

import structlog

from mediameta.config import ResolutionOptions
from mediameta.metadata.dates import date_from_filename, parse_exif_date
from mediameta.metadata.tags import (
    RawTagData,
    first_present,
    first_tag_value,
    is_present,
    source_file,
    tag_group,
    tag_value,
)
from mediameta.models.record import NormalizedRecord
from mediameta.models.sidecar import LegacySidecar

logger = structlog.get_logger(__name__)

MIME_VIDEO_REGEX = re.compile(r"^video/.*$")
MIME_GIF = "image/gif"

# Creation date tags, most reliable first
DATE_SOURCES = (
    ("EXIF", "DateTimeOriginal"),
    ("H264", "DateTimeOriginal"),
    ("QuickTime", "DateTimeOriginal"),
    ("QuickTime", "ContentCreateDate"),
    ("QuickTime", "CreationDate"),
    ("QuickTime", "CreateDate"),
)

CAPTION_SOURCES = (
    # "Description" first
    ("EXIF", "Description"),
    ("XMP", "Description"),
    ("EXIF", "ImageDescription"),
    # then "Title"
    ("EXIF", "Title"),
    ("XMP", "Title"),
    ("QuickTime", "Title"),
    # then educated guesses
    ("IPTC", "Caption-Abstract"),
    ("IPTC", "Headline"),
    ("XMP", "Label"),
)

# Merged snapshot: EXIF tag -> (group, tag) used when the EXIF value is missing.
# Videos (e.g. iPhone MOV) carry these under QuickTime/Composite instead.
EXIF_FALLBACKS = {
    "DateTimeOriginal": ("QuickTime", "MediaCreateDate"),
    "Model": ("QuickTime", "Model"),
    "Make": ("QuickTime", "Make"),
    "GPSLatitude": ("Composite", "GPSLatitude"),
    "GPSLongitude": ("Composite", "GPSLongitude"),
    "GPSAltitude": ("QuickTime", "GPSAltitude"),
}


class MetadataResolver:
    """Builds one normalized record from extractor tags and legacy sidecar data.

    Stateless apart from its options, so a single instance can be shared
    across threads.
    """

    def __init__(self, options: Optional[ResolutionOptions] = None):
        """Initialize metadata resolver.

        Args:
            options: Resolution options (defaults when None)
        """
        self.options = options or ResolutionOptions()

    def resolve(
        self,
        raw_tags: RawTagData,
        sidecar: Any = None,
    ) -> NormalizedRecord:
        """Resolve the best value for every field.

        Never raises for missing or malformed tags; each field falls back
        to its own default independently.

        Args:
            raw_tags: Tag groups from the metadata extractor
            sidecar: Legacy sidecar record (LegacySidecar, mapping or None)

        Returns:
            NormalizedRecord for the file
        """
        legacy = LegacySidecar.from_mapping(sidecar)
        width, height = self._dimensions(raw_tags)

        record = NormalizedRecord(
            date=self._date(raw_tags),
            caption=self._caption(raw_tags, legacy),
            keywords=self._keywords(raw_tags, legacy),
            video=self._video(raw_tags),
            animated=self._animated(raw_tags),
            rating=self._rating(raw_tags),
            favourite=self._favourite(legacy),
            width=width,
            height=height,
            exif=self.merged_exif(raw_tags) if self.options.embed_exif else None,
        )

        logger.debug(
            "Resolved metadata",
            file=source_file(raw_tags),
            has_sidecar=legacy is not None,
            record=str(record),
        )
        return record

    def _date(self, raw_tags: RawTagData) -> int:
        """Return the most likely creation date in epoch milliseconds.

        Resolution order:
        1. Date tags (EXIF, H264, QuickTime)
        2. Date-looking filename
        3. File modification date
        """
        file = source_file(raw_tags)

        # A malformed tag date ends this step; later tags are not tried
        meta_date = parse_exif_date(first_tag_value(raw_tags, DATE_SOURCES))
        if meta_date is not None:
            logger.debug("Date resolved from tags", file=file)
            return meta_date

        name_date = date_from_filename(file)
        if name_date is not None:
            logger.debug("Date resolved from filename", file=file)
            return name_date

        modified = parse_exif_date(tag_value(raw_tags, "File", "FileModifyDate"))
        if modified is not None:
            logger.debug("Date resolved from modification date", file=file)
            return modified

        logger.warning(
            "No usable date, defaulting to epoch",
            file=file,
            file_modify_date=tag_value(raw_tags, "File", "FileModifyDate"),
        )
        return 0

    def _caption(self, raw_tags: RawTagData, legacy: Optional[LegacySidecar]) -> Optional[str]:
        value = first_present(
            [lambda: legacy.caption if legacy else None]
            + [
                (lambda group=group, name=name: tag_value(raw_tags, group, name))
                for group, name in CAPTION_SOURCES
            ]
        )
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def _keywords(self, raw_tags: RawTagData, legacy: Optional[LegacySidecar]) -> tuple[str, ...]:
        # Legacy keywords are comma-separated and used verbatim
        if legacy and legacy.keywords:
            return tuple(legacy.keywords.split(","))

        iptc = tag_value(raw_tags, "IPTC", "Keywords")
        if is_present(iptc):
            values = iptc if isinstance(iptc, (list, tuple)) else [iptc]
            return tuple(v if isinstance(v, str) else str(v) for v in values)

        return ()

    def _video(self, raw_tags: RawTagData) -> bool:
        mime_type = tag_value(raw_tags, "File", "MIMEType")
        return isinstance(mime_type, str) and MIME_VIDEO_REGEX.match(mime_type) is not None

    def _animated(self, raw_tags: RawTagData) -> bool:
        if tag_value(raw_tags, "File", "MIMEType") != MIME_GIF:
            return False
        frames = _to_int(tag_value(raw_tags, "GIF", "FrameCount"))
        return frames is not None and frames > 0

    def _rating(self, raw_tags: RawTagData) -> int:
        rating = _to_int(tag_value(raw_tags, "XMP", "Rating"))
        # -1 means "rejected"
        if rating is None or rating < 0:
            return 0
        return rating

    def _favourite(self, legacy: Optional[LegacySidecar]) -> bool:
        return legacy is not None and legacy.star == "yes"

    def _dimensions(self, raw_tags: RawTagData) -> tuple[Optional[int], Optional[int]]:
        """Return (width, height) from Composite:ImageSize.

        Composite covers all the underlying groups (EXIF, QuickTime, ASF...).
        Anything other than "<width>x<height>" gives (None, None).
        """
        if "Composite" not in raw_tags:
            return None, None

        size = tag_value(raw_tags, "Composite", "ImageSize")
        if not isinstance(size, str) or "x" not in size:
            if size is not None:
                logger.debug("Unrecognized image size", file=source_file(raw_tags), size=size)
            return None, None

        width, _, height = size.partition("x")
        try:
            return int(width.strip(), 10), int(height.strip(), 10)
        except ValueError:
            logger.debug("Unrecognized image size", file=source_file(raw_tags), size=size)
            return None, None

    def merged_exif(self, raw_tags: RawTagData) -> dict[str, Any]:
        """Return the EXIF group with gaps filled from video tag groups.

        Absent EXIF, QuickTime or Composite groups count as empty.
        """
        exif = dict(tag_group(raw_tags, "EXIF"))
        for name, (group, fallback) in EXIF_FALLBACKS.items():
            if is_present(exif.get(name)):
                continue
            value = tag_value(raw_tags, group, fallback)
            if is_present(value):
                exif[name] = value
            else:
                exif.pop(name, None)
        return exif


def resolve(
    raw_tags: RawTagData,
    sidecar: Any = None,
    options: Optional[ResolutionOptions | Mapping[str, Any]] = None,
) -> NormalizedRecord:
    """Resolve one normalized record from raw tags and legacy sidecar data.

    Args:
        raw_tags: Tag groups from the metadata extractor
        sidecar: Legacy sidecar record, if any
        options: ResolutionOptions or a mapping (``embed_exif`` or ``embedExif``)

    Returns:
        NormalizedRecord for the file

    Raises:
        pydantic.ValidationError: If the mapping has unknown options
    """
    if isinstance(options, Mapping):
        options = ResolutionOptions.model_validate(options)
    return MetadataResolver(options).resolve(raw_tags, sidecar)


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
