"""Result models produced by the metadata extractor."""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from . import matching

TagMap = Dict[str, Any]


class ResultModel(BaseModel):
    """Shared configuration for immutable result models."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class FileTimestamps(ResultModel):
    """Filesystem timestamps for a file, all timezone-aware UTC.

    Attributes:
        modified: Last content modification.
        accessed: Last access.
        changed: Last status change (permissions, ownership, content).
            Not reported on every platform.
        created: Birth time. Not reported on every filesystem.
    """

    modified: Optional[datetime] = None
    accessed: Optional[datetime] = None
    changed: Optional[datetime] = None
    created: Optional[datetime] = None


class TypeCandidate(ResultModel):
    """One ranked file type reported by TrID.

    Attributes:
        label: Human-readable type description.
        mime_type: MIME type when the definition provides one.
        matched_extension: Lower-cased extension(s) the definition expects,
            e.g. ``.pdf`` or ``.jpg/jpeg``. Empty when the type has none.
        probability: Match probability in percent.
        definition: Name of the definition file that matched.
        related_url: Reference URL attached to the definition.
    """

    label: str
    mime_type: str = ""
    matched_extension: str = ""
    probability: Optional[float] = None
    definition: Optional[str] = None
    related_url: Optional[str] = None


class ExtractionResult(ResultModel):
    """Merged filesystem, type, and tag metadata for a single file.

    Attributes:
        name: Base name of the file.
        extension: Lower-cased extension including the dot, or empty.
        size_bytes: File size in bytes.
        timestamps: Filesystem timestamps.
        candidate_types: Detected types, most likely first.
        tags: Read-only view of the tag map produced by ExifTool.
    """

    name: str = ""
    extension: str = ""
    size_bytes: int = 0
    timestamps: FileTimestamps = Field(default_factory=FileTimestamps)
    candidate_types: Tuple[TypeCandidate, ...] = ()
    tags: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("tags", mode="after")
    @classmethod
    def _freeze_tags(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("tags")
    def _serialize_tags(self, value: Mapping[str, Any]) -> TagMap:
        return dict(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def extension_mismatch(self) -> bool:
        """Whether the extension disagrees with the top candidate type."""
        return matching.extension_mismatch(self.extension, self.candidate_types)

    @property
    def primary_type(self) -> Optional[TypeCandidate]:
        """Return the most likely candidate type, if any."""
        return self.candidate_types[0] if self.candidate_types else None


__all__ = ["TagMap", "FileTimestamps", "TypeCandidate", "ExtractionResult"]
