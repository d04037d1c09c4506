"""Creation-date parsing for tag values and filenames."""

import re
from datetime import datetime
from pathlib import PurePath
from typing import Any, Optional

import structlog

logger = structlog.get_logger(__name__)

# EXIF dates use colons in the date part, unlike ISO 8601
# e.g. "2020:02:01 16:12:24+02:00"
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
EXIF_DATE_REGEX = re.compile(
    r"^(?P<stamp>\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2})"
    r"(?:\.\d+)?"
    r"\s*(?P<offset>Z|[+-]\d{2}:?\d{2})?$"
)

# Date-looking filenames, e.g. "20200201_161224.jpg" or "IMG_2020-02-01 16.12.24.mp4"
FILENAME_DATE_REGEX = re.compile(r"\d{4}[_\-.\s]?(?:\d{2}[_\-.\s]?){5}\..{3,4}")
FILENAME_DATE_FORMAT = "%Y%m%d%H%M%S"


def to_epoch_ms(value: datetime) -> Optional[int]:
    """Convert a datetime to epoch milliseconds.

    Naive datetimes are interpreted as local time.
    """
    try:
        return int(round(value.timestamp() * 1000))
    except (OverflowError, OSError, ValueError):
        return None


def parse_exif_date(value: Any) -> Optional[int]:
    """Parse an EXIF-style date-time into epoch milliseconds.

    Fractional seconds are ignored. Without a timezone offset the value is
    treated as local wall time.

    Args:
        value: Raw tag value, e.g. "2020:02:01 16:12:24+02:00"

    Returns:
        Epoch milliseconds, or None if the value is not a valid date
    """
    if not isinstance(value, str):
        return None

    match = EXIF_DATE_REGEX.match(value.strip())
    if not match:
        return None

    try:
        parsed = datetime.strptime(match.group("stamp"), EXIF_DATE_FORMAT)
        offset = match.group("offset")
        if offset:
            parsed = parsed.replace(tzinfo=datetime.strptime(offset, "%z").tzinfo)
    except ValueError:
        # e.g. "0000:00:00 00:00:00" written by some cameras
        return None

    return to_epoch_ms(parsed)


def date_from_filename(filename: Optional[str]) -> Optional[int]:
    """Infer a creation date from a date-looking filename.

    The first 14 digits of the matching part are read as
    year/month/day/hour/minute/second; separators and extension are ignored.

    Args:
        filename: File name or path (only the base name is used)

    Returns:
        Epoch milliseconds, or None if the name doesn't look like a date
    """
    if not filename:
        return None

    name = PurePath(filename).name
    match = FILENAME_DATE_REGEX.search(name)
    if not match:
        return None

    digits = re.sub(r"\D", "", match.group())[:14]
    try:
        parsed = datetime.strptime(digits, FILENAME_DATE_FORMAT)
    except ValueError:
        logger.debug("Filename looks like a date but is not valid", filename=name)
        return None

    return to_epoch_ms(parsed)
