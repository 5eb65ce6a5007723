"""Export of batch results."""

from .exporter import CSV_HEADER, DownloadHandle, ResultExporter

__all__ = ["CSV_HEADER", "DownloadHandle", "ResultExporter"]
