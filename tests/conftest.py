"""Shared fixtures: an in-memory gateway and sample records."""

from __future__ import annotations

import pytest

from efk.backend.interface import (
    FileMetadata,
    FileType,
    GatewayOutcome,
    GatewayResult,
    RemoteAssetGateway,
)
from efk.mapping.models import SemanticRecord


class FakeGateway(RemoteAssetGateway):
    """Gateway answering from dictionaries and recording every call."""

    def __init__(
        self,
        validations: dict[str, GatewayResult] | None = None,
        attachments: dict[str, GatewayResult] | None = None,
        raises: dict[str, Exception] | None = None,
        file_types: list[FileType] | Exception | None = None,
    ) -> None:
        self.validations = validations or {}
        self.attachments = attachments or {}
        self.raises = raises or {}
        self.file_types = file_types if file_types is not None else []
        self.calls: list[tuple] = []
        self.closed = False

    async def __aenter__(self) -> FakeGateway:
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        self.closed = True

    async def validate_exists(self, record_id: str) -> GatewayResult:
        self.calls.append(("validate", record_id))
        if record_id in self.raises:
            raise self.raises[record_id]
        return self.validations.get(record_id, GatewayResult.success(200))

    async def attach_or_update_file(self, record_id: str, metadata: FileMetadata) -> GatewayResult:
        self.calls.append(("attach", record_id, metadata))
        return self.attachments.get(record_id, GatewayResult.success(200))

    async def list_file_type_vocabulary(self) -> list[FileType]:
        if isinstance(self.file_types, Exception):
            raise self.file_types
        return list(self.file_types)


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def not_found() -> GatewayResult:
    return GatewayResult.failure(GatewayOutcome.NOT_FOUND, "Asset not found", 404)


@pytest.fixture()
def records() -> list[SemanticRecord]:
    return [
        SemanticRecord(record_id="991111111111", remote_url="https://example.org/a.pdf", title="A"),
        SemanticRecord(record_id="992222222222", remote_url="https://example.org/b.pdf"),
        SemanticRecord(record_id="993333333333"),
    ]


@pytest.fixture()
def make_gateway():
    """Factory for gateways with canned answers."""
    return FakeGateway
