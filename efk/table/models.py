"""Pydantic models for parsed CSV tables."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CsvTable(BaseModel):
    """Headers and rows of one uploaded CSV file.

    Every row holds a value for every header; a missing cell is an empty string.
    Duplicate headers are kept as read and reported by ``validate_structure``.
    """

    model_config = ConfigDict(frozen=True)

    headers: tuple[str, ...] = Field(..., description="Column headers in file order")
    rows: tuple[dict[str, str], ...] = Field(default_factory=tuple, description="Data rows keyed by header")
    file_name: str | None = Field(None, description="Name of the uploaded file")

    @model_validator(mode="before")
    @classmethod
    def _fill_missing_cells(cls, data):
        if not isinstance(data, dict):
            return data
        headers = tuple(data.get("headers") or ())
        known = set(headers)
        rows = []
        for row in data.get("rows") or ():
            extra = set(row) - known
            if extra:
                raise ValueError(f"Row has values for unknown headers: {sorted(extra)}")
            rows.append({header: row.get(header, "") for header in headers})
        return {**data, "rows": tuple(rows)}

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def sample(self, size: int) -> list[dict[str, str]]:
        """Return the first ``size`` rows, used for mapping suggestions."""
        return list(self.rows[:size])


class StructureValidation(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
