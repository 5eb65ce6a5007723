from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GatewayOutcome(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    BAD_REQUEST = "bad_request"
    CONFLICT = "conflict"
    ERROR = "error"


class GatewayResult(BaseModel):
    """Outcome of one gateway call. Failures are values, not exceptions."""
    model_config = ConfigDict(frozen=True)

    outcome: GatewayOutcome
    detail: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is GatewayOutcome.OK

    @classmethod
    def success(cls, status_code: int | None = None) -> GatewayResult:
        return cls(outcome=GatewayOutcome.OK, status_code=status_code)

    @classmethod
    def failure(
        cls,
        outcome: GatewayOutcome,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> GatewayResult:
        return cls(outcome=outcome, detail=detail, status_code=status_code)


class FileMetadata(BaseModel):
    """Remote file to attach to an asset."""
    url: str
    title: str = Field("Uploaded File")
    description: str = Field("")
    media_type: str = Field("application/octet-stream")


class FileType(BaseModel):
    code: str
    description: str


class RemoteAssetGateway(ABC):
    """Abstract base class for the remote repository API."""

    @abstractmethod
    async def validate_exists(self, record_id: str) -> GatewayResult:
        """Check that an asset exists and is accessible.

        Outcomes: OK, NOT_FOUND, FORBIDDEN or ERROR.
        """
        pass

    @abstractmethod
    async def attach_or_update_file(self, record_id: str, metadata: FileMetadata) -> GatewayResult:
        """Attach a remote file to an asset.

        Outcomes: OK, BAD_REQUEST, CONFLICT or ERROR.
        """
        pass

    @abstractmethod
    async def list_file_type_vocabulary(self) -> list[FileType]:
        """Return the repository's file type vocabulary. May raise."""
        pass
