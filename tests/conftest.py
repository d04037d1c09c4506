"""Shared pytest fixtures for mediameta tests."""

import logging

import pytest

from mediameta.config import ResolutionOptions
from mediameta.models.sidecar import LegacySidecar


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logging.basicConfig(level=logging.WARNING, handlers=[logging.NullHandler()], force=True)


@pytest.fixture
def photo_tags():
    """Tags for a JPEG straight from a camera."""
    return {
        "SourceFile": "/photos/2020/IMG_0001.jpg",
        "File": {
            "MIMEType": "image/jpeg",
            "FileModifyDate": "2021:03:04 05:06:07+00:00",
        },
        "EXIF": {
            "DateTimeOriginal": "2020:02:01 16:12:24+02:00",
            "Make": "Canon",
            "Model": "EOS 80D",
            "ImageDescription": "Harbour at dusk",
        },
        "IPTC": {"Keywords": ["harbour", "boats"]},
        "XMP": {"Rating": 4},
        "Composite": {"ImageSize": "6000x4000"},
    }


@pytest.fixture
def iphone_video_tags():
    """Tags for an iPhone MOV, with camera data under QuickTime/Composite."""
    return {
        "SourceFile": "/photos/2020/IMG_0002.MOV",
        "File": {
            "MIMEType": "video/quicktime",
            "FileModifyDate": "2021:03:04 05:06:07+00:00",
        },
        "QuickTime": {
            "CreationDate": "2020:02:01 16:12:24+02:00",
            "MediaCreateDate": "2020:02:01 14:12:24",
            "Make": "Apple",
            "Model": "iPhone 5s",
            "GPSAltitude": 12.5,
        },
        "Composite": {
            "ImageSize": "1920x1080",
            "GPSLatitude": 51.5,
            "GPSLongitude": -0.12,
        },
    }


@pytest.fixture
def bare_tags():
    """Tags for a file with nothing but a modification date."""
    return {
        "SourceFile": "/photos/misc/holiday.png",
        "File": {
            "MIMEType": "image/png",
            "FileModifyDate": "2019:07:08 09:10:11+00:00",
        },
    }


@pytest.fixture
def legacy_sidecar():
    """Picasa annotations for a starred photo."""
    return LegacySidecar(caption="Family dinner", keywords="family,food", star="yes")


@pytest.fixture
def embed_options():
    """Options with EXIF embedding turned on."""
    return ResolutionOptions(embed_exif=True)
