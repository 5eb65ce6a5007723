from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TargetField(str, Enum):
    RECORD_ID = "record_id"
    REMOTE_URL = "remote_url"
    TITLE = "title"
    DESCRIPTION = "description"
    MEDIA_TYPE = "media_type"
    IGNORE = "ignore"

    @property
    def label(self) -> str:
        return _FIELD_LABELS[self]


_FIELD_LABELS = {
    TargetField.RECORD_ID: "MMS ID",
    TargetField.REMOTE_URL: "Remote URL",
    TargetField.TITLE: "File Title",
    TargetField.DESCRIPTION: "File Description",
    TargetField.MEDIA_TYPE: "File Type",
    TargetField.IGNORE: "Ignore Column",
}


class FieldMapping(BaseModel):
    """Association of one CSV column with a semantic field."""
    source_header: str = Field(..., description="CSV column header")
    sample_value: str = Field("", description="First data row's value, capped at 100 characters")
    target_field: TargetField = Field(TargetField.IGNORE, description="Semantic field or ignore")
    confidence: float = Field(0.1, ge=0.0, le=1.0, description="Display-only suggestion confidence")


class MappingValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class SemanticRecord(BaseModel):
    """One CSV row after a mapping has been applied."""
    model_config = ConfigDict(frozen=True)

    record_id: str = ""
    remote_url: str | None = None
    title: str | None = None
    description: str | None = None
    media_type: str | None = None


class ColumnAssignment(BaseModel):
    column: str = Field(..., description="CSV column header")
    field: TargetField = Field(..., description="Semantic field for the column")


class MappingConfig(BaseModel):
    """Mapping file confirmed by a user. Columns not listed are ignored."""
    name: str | None = None
    columns: list[ColumnAssignment] = Field(default_factory=list)
