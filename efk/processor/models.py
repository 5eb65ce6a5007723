"""Pydantic models for batch processing results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..mapping.models import SemanticRecord


class RecordStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class ProcessedRecord(SemanticRecord):
    """A semantic record with the outcome of its processing step."""

    status: RecordStatus = Field(..., description="Outcome of the record")
    error_message: str | None = Field(None, description="Why the record failed")
    viewer_url: str | None = Field(None, description="Link to the asset's viewer page")
    processing_time: float = Field(0.0, ge=0, description="Seconds spent on the record")

    @property
    def succeeded(self) -> bool:
        return self.status is RecordStatus.SUCCESS


class ProcessingResult(BaseModel):
    """Aggregated outcome of one batch run."""

    model_config = ConfigDict(frozen=True)

    successful: tuple[ProcessedRecord, ...] = Field(default_factory=tuple)
    failed: tuple[ProcessedRecord, ...] = Field(default_factory=tuple)
    total_processed: int = 0
    success_count: int = 0
    failure_count: int = 0
    processing_time: float = Field(0.0, ge=0, description="Seconds spent on the whole run")

    @model_validator(mode="after")
    def _check_counts(self) -> ProcessingResult:
        if self.success_count != len(self.successful) or self.failure_count != len(self.failed):
            raise ValueError("Counts do not match the record lists")
        if self.success_count + self.failure_count != self.total_processed:
            raise ValueError("success_count + failure_count must equal total_processed")
        return self

    @classmethod
    def from_records(cls, records: list[ProcessedRecord], processing_time: float = 0.0) -> ProcessingResult:
        successful = tuple(r for r in records if r.succeeded)
        failed = tuple(r for r in records if not r.succeeded)
        return cls(
            successful=successful,
            failed=failed,
            total_processed=len(records),
            success_count=len(successful),
            failure_count=len(failed),
            processing_time=processing_time,
        )

    @property
    def record_ids(self) -> list[str]:
        """Identifiers of the successful records, in input order."""
        return [r.record_id for r in self.successful]

    def combined(self) -> list[ProcessedRecord]:
        """Successful records followed by failed ones, for report tables."""
        return [*self.successful, *self.failed]
