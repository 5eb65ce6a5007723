"""Sequential validate-then-attach processing of semantic records."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Protocol, Sequence, runtime_checkable

from ..backend.interface import FileMetadata, GatewayOutcome, GatewayResult, RemoteAssetGateway
from ..errors import RecordError
from ..mapping.models import SemanticRecord
from .models import ProcessedRecord, ProcessingResult, RecordStatus

DEFAULT_PACING_DELAY = 0.1
DEFAULT_FILE_TITLE = "Uploaded File"
DEFAULT_MEDIA_TYPE = "application/octet-stream"

ProgressCallback = Callable[[int, int, str], None]


@runtime_checkable
class ProgressSink(Protocol):
    """Receives progress for one run and is closed exactly once when it ends."""

    def advance(self, current: int, total: int, record_id: str) -> None: ...

    def close(self) -> None: ...


class BatchProcessor:
    """Drives records one at a time through validation and file attachment.

    A failing record never stops the run; it is reported in
    ``ProcessingResult.failed`` with a message naming its identifier.
    """

    def __init__(
        self,
        gateway: RemoteAssetGateway,
        pacing_delay: float = DEFAULT_PACING_DELAY,
        viewer_url_template: str | None = None,
    ) -> None:
        if pacing_delay < 0:
            raise ValueError("pacing_delay must not be negative")
        if viewer_url_template:
            try:
                viewer_url_template.format(record_id="0")
            except (KeyError, IndexError, ValueError) as e:
                raise ValueError(
                    f"viewer_url_template may only use the {{record_id}} placeholder: {viewer_url_template!r}"
                ) from e
        self.gateway = gateway
        self.pacing_delay = pacing_delay
        self.viewer_url_template = viewer_url_template

    async def run(
        self,
        records: Sequence[SemanticRecord],
        on_progress: ProgressCallback | ProgressSink | None = None,
    ) -> ProcessingResult:
        """Process every record in order and aggregate the outcomes.

        Args:
            records: Records to process, in input order
            on_progress: Callback ``(current, total, record_id)`` or a ProgressSink

        Returns:
            Result with successful and failed records in input order
        """
        started = time.perf_counter()
        processed: list[ProcessedRecord] = []

        try:
            if records is None:
                raise TypeError("records must be a sequence of SemanticRecord, not None")
            records = list(records)
            total = len(records)

            for index, record in enumerate(records):
                self._notify(on_progress, index + 1, total, record.record_id)
                processed.append(await self._process_record(index, record))

                if index < total - 1 and self.pacing_delay > 0:
                    await asyncio.sleep(self.pacing_delay)
        finally:
            if isinstance(on_progress, ProgressSink):
                on_progress.close()

        return ProcessingResult.from_records(processed, time.perf_counter() - started)

    async def _process_record(self, index: int, record: SemanticRecord) -> ProcessedRecord:
        started = time.perf_counter()
        try:
            await self._validate_and_attach(index, record)
        except RecordError as e:
            return self._classify(record, started, error=str(e))
        except Exception as e:
            message = f"Unexpected error processing asset {record.record_id}: {e}"
            return self._classify(record, started, error=message)
        return self._classify(record, started)

    async def _validate_and_attach(self, index: int, record: SemanticRecord) -> None:
        record_id = record.record_id.strip()
        if not record_id:
            raise RecordError(record.record_id, f"Row {index + 1} has no MMS ID")

        validation = await self.gateway.validate_exists(record_id)
        if not validation.ok:
            raise RecordError(record_id, self._validation_message(record_id, validation))

        if record.remote_url and record.remote_url.strip():
            metadata = FileMetadata(
                url=record.remote_url.strip(),
                title=record.title or DEFAULT_FILE_TITLE,
                description=record.description or "",
                media_type=record.media_type or DEFAULT_MEDIA_TYPE,
            )
            attached = await self.gateway.attach_or_update_file(record_id, metadata)
            if not attached.ok:
                raise RecordError(
                    record_id,
                    f"Failed to attach file to asset {record_id}: {self._reason(attached)}",
                )

    def _classify(self, record: SemanticRecord, started: float, error: str | None = None) -> ProcessedRecord:
        elapsed = time.perf_counter() - started
        if error is not None:
            return ProcessedRecord(
                **record.model_dump(),
                status=RecordStatus.ERROR,
                error_message=error,
                processing_time=elapsed,
            )
        return ProcessedRecord(
            **record.model_dump(),
            status=RecordStatus.SUCCESS,
            viewer_url=self.viewer_url(record.record_id),
            processing_time=elapsed,
        )

    def viewer_url(self, record_id: str) -> str | None:
        if not self.viewer_url_template:
            return None
        return self.viewer_url_template.format(record_id=record_id)

    @staticmethod
    def _validation_message(record_id: str, result: GatewayResult) -> str:
        match result.outcome:
            case GatewayOutcome.NOT_FOUND:
                return f"Asset {record_id} not found"
            case GatewayOutcome.FORBIDDEN:
                return f"Access denied for asset {record_id}"
            case _:
                return f"Failed to validate asset {record_id}: {result.detail or 'Unknown error'}"

    @staticmethod
    def _reason(result: GatewayResult) -> str:
        match result.outcome:
            case GatewayOutcome.BAD_REQUEST:
                label = "bad request"
            case GatewayOutcome.CONFLICT:
                label = "conflict"
            case _:
                label = "error"
        return f"{label} ({result.detail})" if result.detail else label

    @staticmethod
    def _notify(on_progress: ProgressCallback | ProgressSink | None, current: int, total: int, record_id: str) -> None:
        if on_progress is None:
            return
        if isinstance(on_progress, ProgressSink):
            on_progress.advance(current, total, record_id)
        else:
            on_progress(current, total, record_id)
