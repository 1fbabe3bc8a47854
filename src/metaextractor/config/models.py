"""Configuration models describing metaextractor settings."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TRID_MATCHES = 5

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MetaExtractorBaseModel(BaseModel):
    """Shared configuration for metaextractor settings models."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class TridSettings(MetaExtractorBaseModel):
    """Options for the TrID file identifier.

    Attributes:
        path: TrID executable name or path.
        definitions: Path to the TrID definitions package (``triddefs.trd``).
        timeout_seconds: Maximum runtime for one scan; non-positive disables it.
        matches: Maximum number of candidate types to request. Non-positive
            values fall back to the default of 5.
    """

    path: str = "trid"
    definitions: Optional[str] = None
    timeout_seconds: float = 30.0
    matches: int = DEFAULT_TRID_MATCHES


class ExifToolSettings(MetaExtractorBaseModel):
    """Options for ExifTool.

    Attributes:
        path: Override for the ExifTool executable; None uses ``exiftool``
            from PATH.
    """

    path: Optional[str] = None


class LoggingSettings(MetaExtractorBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level for the CLI. Names are case-insensitive.
    """

    level: LogLevel = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class CLIOptions(MetaExtractorBaseModel):
    """CLI presentation defaults.

    Attributes:
        show_tags_default: Whether `extract` lists the full tag map by default.
    """

    show_tags_default: bool = False


class MetaExtractorConfig(MetaExtractorBaseModel):
    """Top-level configuration for metaextractor.

    Attributes:
        trid: TrID settings.
        exiftool: ExifTool settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    trid: TridSettings = Field(default_factory=TridSettings)
    exiftool: ExifToolSettings = Field(default_factory=ExifToolSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DEFAULT_TRID_MATCHES",
    "LogLevel",
    "MetaExtractorBaseModel",
    "TridSettings",
    "ExifToolSettings",
    "LoggingSettings",
    "CLIOptions",
    "MetaExtractorConfig",
]
