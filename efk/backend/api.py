from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .interface import (
    FileMetadata,
    FileType,
    GatewayOutcome,
    GatewayResult,
    RemoteAssetGateway,
)

ASSET_PATH = "/esploro/v1/assets/{record_id}"
ASSET_FILES_PATH = "/esploro/v1/assets/{record_id}/files"
FILE_TYPES_PATH = "/almaws/v1/conf/mapping-tables/FileTypes"


class ApiGateway(RemoteAssetGateway):
    """Gateway using the Esploro and Alma REST APIs.

    Use as an async context manager so the HTTP client gets closed::

        async with ApiGateway(base_url, api_key) as gateway:
            result = await gateway.validate_exists("991234")
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"apikey {api_key}"
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> ApiGateway:
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def validate_exists(self, record_id: str) -> GatewayResult:
        try:
            response = await self.client.get(ASSET_PATH.format(record_id=quote(record_id, safe="")))
        except httpx.HTTPError as e:
            return GatewayResult.failure(GatewayOutcome.ERROR, str(e) or type(e).__name__)

        match response.status_code:
            case 200:
                return GatewayResult.success(response.status_code)
            case 404:
                return self._failure(GatewayOutcome.NOT_FOUND, response)
            case 401 | 403:
                return self._failure(GatewayOutcome.FORBIDDEN, response)
            case _:
                return self._failure(GatewayOutcome.ERROR, response)

    async def attach_or_update_file(self, record_id: str, metadata: FileMetadata) -> GatewayResult:
        body = {
            "url": metadata.url,
            "title": metadata.title,
            "description": metadata.description,
            "type": metadata.media_type,
        }
        try:
            response = await self.client.post(ASSET_FILES_PATH.format(record_id=quote(record_id, safe="")), json=body)
        except httpx.HTTPError as e:
            return GatewayResult.failure(GatewayOutcome.ERROR, str(e) or type(e).__name__)

        if response.is_success:
            return GatewayResult.success(response.status_code)
        match response.status_code:
            case 400:
                return self._failure(GatewayOutcome.BAD_REQUEST, response)
            case 409:
                return self._failure(GatewayOutcome.CONFLICT, response)
            case _:
                return self._failure(GatewayOutcome.ERROR, response)

    async def list_file_type_vocabulary(self) -> list[FileType]:
        response = await self.client.get(FILE_TYPES_PATH)
        response.raise_for_status()
        data = response.json() or {}

        file_types = []
        for row in data.get("row") or []:
            code = (row.get("column0") or {}).get("value") or ""
            if not code:
                continue
            description = (row.get("column1") or {}).get("value") or code
            file_types.append(FileType(code=code, description=description))
        return file_types

    def _failure(self, outcome: GatewayOutcome, response: httpx.Response) -> GatewayResult:
        return GatewayResult.failure(outcome, self._error_detail(response), response.status_code)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Extract the message from an Ex Libris error envelope, else the body text."""
        try:
            data: Any = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            errors = (data.get("errorList") or {}).get("error") or []
            if isinstance(errors, dict):
                errors = [errors]
            for error in errors:
                message = error.get("errorMessage") if isinstance(error, dict) else None
                if message:
                    return str(message).strip()

        text = response.text.strip()
        return text or f"HTTP {response.status_code}"
