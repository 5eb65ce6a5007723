"""Parsed CSV tables and the reader that produces them."""

from .models import CsvTable, StructureValidation
from .reader import read_csv_file, parse_csv_text, validate_structure

__all__ = ["CsvTable", "StructureValidation", "read_csv_file", "parse_csv_text", "validate_structure"]
