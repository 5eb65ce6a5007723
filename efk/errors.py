"""Exception hierarchy for Esploro File Kit."""

from __future__ import annotations


class EfkError(Exception):
    """Base class for all kit errors."""


class InputError(EfkError, ValueError):
    """The uploaded CSV file cannot be used (missing, empty, oversized, malformed)."""


class MappingError(EfkError, ValueError):
    """A column mapping is not usable for processing."""

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class RecordError(EfkError):
    """A single record failed; always names the affected identifier."""

    def __init__(self, record_id: str, message: str) -> None:
        self.record_id = record_id
        super().__init__(message)
