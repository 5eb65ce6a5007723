"""Export of successfully processed identifiers."""

from __future__ import annotations

import shutil
import tempfile
import time
from pathlib import Path
from typing import Iterable

import pandas as pd

from ..processor.models import ProcessedRecord

CSV_HEADER = "MMS ID"


class DownloadHandle:
    """Temporary file holding an exported CSV until it is released.

    Release it once it is no longer needed, or use it as a context manager.
    """

    def __init__(self, content: str, file_name: str) -> None:
        self.file_name = file_name
        self._directory = Path(tempfile.mkdtemp(prefix="efk-"))
        self.path = self._directory / file_name
        self.path.write_bytes(content.encode("utf-8"))
        self.released = False

    def __enter__(self) -> DownloadHandle:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.release()

    def read_bytes(self) -> bytes:
        self._ensure_active()
        return self.path.read_bytes()

    def save(self, destination: str | Path) -> Path:
        """Copy the export to ``destination``; a directory keeps the generated name."""
        self._ensure_active()
        target = Path(destination)
        if target.is_dir():
            target = target / self.file_name
        shutil.copyfile(self.path, target)
        return target

    def release(self) -> None:
        if self.released:
            return
        shutil.rmtree(self._directory, ignore_errors=True)
        self.released = True

    def _ensure_active(self) -> None:
        if self.released:
            raise RuntimeError(f"Download handle for {self.file_name} has been released")


class ResultExporter:
    """Builds the identifier CSV of a batch run."""

    def to_csv(self, records: Iterable[ProcessedRecord]) -> str:
        """Header line ``MMS ID`` then one identifier per line, newline-joined."""
        frame = pd.DataFrame({CSV_HEADER: [record.record_id for record in records]}, dtype=str)
        return frame.to_csv(index=False, lineterminator="\n").removesuffix("\n")

    def to_download_handle(self, csv: str) -> DownloadHandle:
        file_name = f"esploro-asset-mms-ids-{int(time.time() * 1000)}.csv"
        return DownloadHandle(csv, file_name)
