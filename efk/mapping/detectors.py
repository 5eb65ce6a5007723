"""Column detectors used to suggest field mappings.

Detectors are checked in the order of ``DETECTORS``; the first match wins.
Token lists and patterns can be tuned freely, the order cannot.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .models import TargetField

IGNORE_CONFIDENCE = 0.1
SAMPLE_VALUE_LIMIT = 100

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class Detector:
    target: TargetField
    confidence: float
    header_tokens: tuple[str, ...]
    value_patterns: tuple[re.Pattern, ...] = field(default_factory=tuple)

    def matches(self, normalized_header: str, sample_value: str) -> bool:
        if any(token in normalized_header for token in self.header_tokens):
            return True
        value = sample_value.strip()
        return bool(value) and any(p.search(value) for p in self.value_patterns)


DETECTORS: tuple[Detector, ...] = (
    Detector(
        target=TargetField.RECORD_ID,
        confidence=0.95,
        header_tokens=("mms", "mmsid", "id", "identifier", "assetid", "recordid"),
        value_patterns=(re.compile(r"^\d{10,19}$"),),
    ),
    Detector(
        target=TargetField.REMOTE_URL,
        confidence=0.9,
        header_tokens=("url", "link", "uri", "href", "remote", "fileurl"),
        value_patterns=(re.compile(r"^https?://", re.IGNORECASE),),
    ),
    Detector(
        target=TargetField.TITLE,
        confidence=0.85,
        header_tokens=("title", "name", "filename", "label"),
    ),
    Detector(
        target=TargetField.DESCRIPTION,
        confidence=0.8,
        header_tokens=("description", "desc", "details", "notes", "comment"),
    ),
    Detector(
        target=TargetField.MEDIA_TYPE,
        confidence=0.85,
        header_tokens=("type", "format", "extension", "mime", "mimetype"),
        value_patterns=(
            re.compile(r"^[a-z]{2,5}$", re.IGNORECASE),
            re.compile(r"^[a-z]+/[a-z\-+.]+$", re.IGNORECASE),
        ),
    ),
)


def normalize_header(header: str) -> str:
    """Lowercase a header and drop everything but letters and digits."""
    return _NON_ALNUM.sub("", header.lower())


def detect(header: str, sample_value: str) -> tuple[TargetField, float]:
    normalized = normalize_header(header)
    for detector in DETECTORS:
        if detector.matches(normalized, sample_value):
            return detector.target, detector.confidence
    return TargetField.IGNORE, IGNORE_CONFIDENCE
