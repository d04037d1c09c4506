"""mediameta - normalize photo and video metadata into one record per file."""

__version__ = "0.1.0"
