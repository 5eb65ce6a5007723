"""Suggesting, validating and applying column mappings."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import yaml

from ..errors import MappingError
from ..table.models import CsvTable
from .detectors import IGNORE_CONFIDENCE, SAMPLE_VALUE_LIMIT, detect
from .models import (
    ColumnAssignment,
    FieldMapping,
    MappingConfig,
    MappingValidation,
    SemanticRecord,
    TargetField,
)

# confidence given to a field picked by hand
MANUAL_CONFIDENCE = 0.9


class ColumnMapper:
    """Maps CSV columns onto the semantic fields of a record."""

    def suggest(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Mapping[str, str]],
    ) -> list[FieldMapping]:
        """Suggest a mapping for every header.

        Args:
            headers: CSV headers in file order
            sample_rows: First rows of the file; only the first one is inspected

        Returns:
            One mapping per header, in header order
        """
        first_row = sample_rows[0] if sample_rows else {}
        mappings = []
        for header in headers:
            sample_value = first_row.get(header) or ""
            target, confidence = detect(header, str(sample_value))
            mappings.append(
                FieldMapping(
                    source_header=header,
                    sample_value=str(sample_value)[:SAMPLE_VALUE_LIMIT],
                    target_field=target,
                    confidence=confidence,
                )
            )
        return mappings

    @staticmethod
    def reassign(mapping: FieldMapping, target: TargetField | str) -> FieldMapping:
        """Return a copy of ``mapping`` pointing at ``target``, as chosen by a user."""
        target = TargetField(target)
        confidence = IGNORE_CONFIDENCE if target is TargetField.IGNORE else MANUAL_CONFIDENCE
        return mapping.model_copy(update={"target_field": target, "confidence": confidence})

    def validate(self, mappings: Iterable[FieldMapping]) -> MappingValidation:
        """Check that a mapping can be used for processing.

        Errors block processing, warnings do not.
        """
        mappings = list(mappings)
        errors: list[str] = []
        warnings: list[str] = []

        targets = Counter(
            m.target_field for m in mappings if m.target_field is not TargetField.IGNORE
        )

        if targets[TargetField.RECORD_ID] == 0:
            errors.append(f"At least one column must be mapped to {TargetField.RECORD_ID.label}")

        for target, count in targets.items():
            if count > 1:
                errors.append(f"Duplicate mappings found for: {target.label}")

        if targets[TargetField.REMOTE_URL] == 0:
            warnings.append(
                f"No column is mapped to {TargetField.REMOTE_URL.label}; "
                "assets will be validated but no files will be attached"
            )

        return MappingValidation(valid=not errors, errors=errors, warnings=warnings)

    def ensure_valid(self, mappings: Iterable[FieldMapping]) -> MappingValidation:
        """Validate and raise MappingError when there are errors."""
        validation = self.validate(mappings)
        if not validation.valid:
            raise MappingError(validation.errors)
        return validation

    def apply(
        self,
        rows: Iterable[Mapping[str, str]],
        mappings: Sequence[FieldMapping],
    ) -> list[SemanticRecord]:
        """Turn raw rows into semantic records, one per row, in row order."""
        active = [m for m in mappings if m.target_field is not TargetField.IGNORE]
        records = []
        for row in rows:
            values: dict[str, str | None] = {}
            for mapping in active:
                value = row.get(mapping.source_header)
                value = str(value).strip() if value else ""
                if mapping.target_field is TargetField.RECORD_ID:
                    values["record_id"] = value
                else:
                    values[mapping.target_field.value] = value or None
            records.append(SemanticRecord(**values))
        return records

    def from_config(self, table: CsvTable, config: MappingConfig) -> list[FieldMapping]:
        """Build mappings for a table from a saved mapping file.

        Raises:
            MappingError: If the file names columns the table does not have
        """
        unknown = [a.column for a in config.columns if a.column not in table.headers]
        if unknown:
            raise MappingError(f"Mapping refers to unknown columns: {', '.join(unknown)}")

        assigned = {a.column: a.field for a in config.columns}
        first_row = table.rows[0] if table.rows else {}
        mappings = []
        for header in table.headers:
            target = assigned.get(header, TargetField.IGNORE)
            mappings.append(
                FieldMapping(
                    source_header=header,
                    sample_value=first_row.get(header, "")[:SAMPLE_VALUE_LIMIT],
                    target_field=target,
                    confidence=IGNORE_CONFIDENCE if target is TargetField.IGNORE else MANUAL_CONFIDENCE,
                )
            )
        return mappings


def load_mapping_config(mapping_path: str | Path) -> MappingConfig:
    """Load a mapping file written by ``dump_mapping_config`` or by hand."""
    mapping_file = Path(mapping_path)
    if not mapping_file.exists():
        raise FileNotFoundError(f"Mapping file not found: {mapping_path}")

    with open(mapping_file, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return MappingConfig(**data)


def dump_mapping_config(
    mappings: Iterable[FieldMapping],
    mapping_path: str | Path,
    name: str | None = None,
) -> MappingConfig:
    """Write the non-ignored columns of a mapping to a YAML file."""
    config = MappingConfig(
        name=name,
        columns=[
            ColumnAssignment(column=m.source_header, field=m.target_field)
            for m in mappings
            if m.target_field is not TargetField.IGNORE
        ],
    )
    with open(mapping_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.model_dump(mode="json", exclude_none=True), f, sort_keys=False, allow_unicode=True)
    return config
