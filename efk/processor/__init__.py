"""Batch processing of semantic records against the repository."""

from .models import ProcessedRecord, ProcessingResult, RecordStatus
from .batch import BatchProcessor, ProgressSink, DEFAULT_PACING_DELAY

__all__ = ["BatchProcessor", "ProgressSink", "ProcessedRecord", "ProcessingResult", "RecordStatus", "DEFAULT_PACING_DELAY"]
