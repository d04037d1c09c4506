"""Configuration management for mediameta."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResolutionOptions(BaseModel):
    """Options controlling how a normalized record is built.

    Accepts both ``embed_exif`` and the camelCase ``embedExif`` used by
    gallery tooling. Unknown options are rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    embed_exif: bool = Field(
        default=False,
        alias="embedExif",
        description="Attach a merged raw-tag snapshot to each record",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    format: str = Field(default="text", description="Log format (json or text)")
    level: str = Field(default="info", description="Log level")
    output: Optional[str] = Field(
        default=None, description="Log file path (console only when unset)"
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        if v.lower() not in ("debug", "info", "warning", "error", "critical"):
            raise ValueError("Invalid log level")
        return v.lower()


class Config(BaseModel):
    """Main configuration model."""

    resolution: ResolutionOptions = Field(
        default_factory=ResolutionOptions, description="Resolution options"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file.

        An empty file gives the defaults.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If the file is not a YAML mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            raw_config = yaml.safe_load(f) or {}

        if not isinstance(raw_config, dict):
            raise ValueError(f"Configuration must be a mapping: {path}")

        return cls.model_validate(raw_config)


def load_config(path: Optional[str | Path] = None) -> Config:
    """Load configuration from file, or the defaults when no path is given."""
    if path is None:
        return Config()

    return Config.from_yaml(path)
