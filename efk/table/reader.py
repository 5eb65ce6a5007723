"""Reading uploaded CSV files into CsvTable objects."""

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

from ..errors import InputError
from .models import CsvTable, StructureValidation

MAX_FILE_SIZE = 10 * 1024 * 1024


def read_csv_file(path: str | Path, max_file_size: int = MAX_FILE_SIZE) -> CsvTable:
    """Read a CSV file from disk.

    Args:
        path: Path to the CSV file
        max_file_size: Size ceiling in bytes

    Returns:
        Parsed table

    Raises:
        InputError: If the file is missing, empty, too large or not parseable
    """
    csv_file = Path(path)
    if not csv_file.is_file():
        raise InputError(f"CSV file not found: {csv_file}")

    size = csv_file.stat().st_size
    if size == 0:
        raise InputError("The uploaded file is empty")
    if size > max_file_size:
        raise InputError(f"File size must be less than {max_file_size // (1024 * 1024)}MB")

    try:
        text = csv_file.read_bytes().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InputError(f"Failed to read CSV file: {e}") from e

    return parse_csv_text(text, file_name=csv_file.name)


def parse_csv_text(text: str, file_name: str | None = None) -> CsvTable:
    """Parse CSV text (comma separated, double-quote escaped) into a table.

    The first line holds the headers. Blank lines are skipped and short rows
    are padded with empty strings. Headers are read as-is so duplicates
    survive for structural validation.
    """
    if not text or not text.strip():
        raise InputError("CSV file is empty")

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as e:
        raise InputError("CSV file has no headers") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise InputError(f"Error parsing CSV: {e}") from e

    frame = frame.fillna("")
    values = [[str(cell).strip() for cell in row] for row in frame.itertuples(index=False)]
    if not values:
        raise InputError("CSV file has no headers")

    header_row, data_rows = values[0], values[1:]
    headers = tuple(header_row)
    if not headers:
        raise InputError("CSV file has no headers")

    rows = []
    for row in data_rows:
        cells = row[:len(headers)]
        if not any(cells):
            continue
        record: dict[str, str] = {}
        for index, header in enumerate(headers):
            # duplicate headers keep the first column's value
            record.setdefault(header, cells[index] if index < len(cells) else "")
        rows.append(record)

    if not rows:
        raise InputError("CSV file has no data rows")

    return CsvTable(headers=headers, rows=tuple(rows), file_name=file_name)


def validate_structure(table: CsvTable) -> StructureValidation:
    """Check a parsed table for structural problems.

    Returns:
        Validation result listing every problem found
    """
    errors: list[str] = []

    if not table.headers:
        errors.append("CSV must have headers")

    if not table.rows:
        errors.append("CSV must have at least one data row")

    if any(not h or not h.strip() for h in table.headers):
        errors.append("CSV has empty header names")

    if len(set(table.headers)) != len(table.headers):
        errors.append("CSV has duplicate header names")

    return StructureValidation(valid=not errors, errors=errors)
