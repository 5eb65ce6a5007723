"""
tests/test_api_gateway.py

HTTP gateway against a mocked Esploro / Alma API (httpx.MockTransport).
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from efk.backend.api import ApiGateway
from efk.backend.interface import FileMetadata, GatewayOutcome
from efk.backend.vocabulary import DEFAULT_FILE_TYPES, load_file_types


def _gateway(handler, api_key: str | None = "secret") -> ApiGateway:
    return ApiGateway("https://api.example.org/", api_key=api_key, transport=httpx.MockTransport(handler))


def _call(handler, method: str, *args, api_key: str | None = "secret"):
    async def _go():
        async with _gateway(handler, api_key) as gateway:
            return await getattr(gateway, method)(*args)
    return asyncio.run(_go())


def _error_body(message: str) -> dict:
    return {"errorsExist": True, "errorList": {"error": [{"errorCode": "x", "errorMessage": message}]}}


# ---------------------------------------------------------------------------
# validate_exists
# ---------------------------------------------------------------------------


class TestValidateExists:
    def test_request_shape(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"mms_id": "991"})

        result = _call(handler, "validate_exists", "991")
        assert result.ok
        assert seen[0].method == "GET"
        assert seen[0].url == "https://api.example.org/esploro/v1/assets/991"
        assert seen[0].headers["Authorization"] == "apikey secret"
        assert seen[0].headers["Accept"] == "application/json"

    def test_no_api_key_no_authorization_header(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        _call(handler, "validate_exists", "991", api_key=None)
        assert "Authorization" not in seen[0].headers

    @pytest.mark.parametrize(
        "status, outcome",
        [
            (404, GatewayOutcome.NOT_FOUND),
            (401, GatewayOutcome.FORBIDDEN),
            (403, GatewayOutcome.FORBIDDEN),
            (500, GatewayOutcome.ERROR),
        ],
    )
    def test_status_mapping(self, status: int, outcome: GatewayOutcome) -> None:
        result = _call(lambda request: httpx.Response(status, text="nope"), "validate_exists", "991")
        assert result.outcome is outcome
        assert result.status_code == status

    def test_error_envelope_message(self) -> None:
        result = _call(
            lambda request: httpx.Response(500, json=_error_body("Internal server error")),
            "validate_exists",
            "991",
        )
        assert result.detail == "Internal server error"

    def test_transport_error_becomes_error_result(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = _call(handler, "validate_exists", "991")
        assert result.outcome is GatewayOutcome.ERROR
        assert "connection refused" in result.detail

    def test_record_id_is_one_path_segment(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(404)

        result = _call(handler, "validate_exists", "991/files")
        assert result.outcome is GatewayOutcome.NOT_FOUND
        assert seen[0].url.raw_path == b"/esploro/v1/assets/991%2Ffiles"


# ---------------------------------------------------------------------------
# attach_or_update_file
# ---------------------------------------------------------------------------


class TestAttachFile:
    def test_request_body(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={})

        metadata = FileMetadata(url="https://x.org/f.pdf", title="Report", description="d", media_type="PDF")
        result = _call(handler, "attach_or_update_file", "991", metadata)

        assert result.ok
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/esploro/v1/assets/991/files"
        assert json.loads(seen[0].content) == {
            "url": "https://x.org/f.pdf",
            "title": "Report",
            "description": "d",
            "type": "PDF",
        }

    def test_record_id_is_one_path_segment(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={})

        _call(handler, "attach_or_update_file", "../991?x=1", FileMetadata(url="https://x.org/f.pdf"))
        assert seen[0].url.raw_path == b"/esploro/v1/assets/..%2F991%3Fx%3D1/files"
        assert seen[0].url.query == b""

    @pytest.mark.parametrize(
        "status, outcome",
        [
            (400, GatewayOutcome.BAD_REQUEST),
            (409, GatewayOutcome.CONFLICT),
            (502, GatewayOutcome.ERROR),
        ],
    )
    def test_status_mapping(self, status: int, outcome: GatewayOutcome) -> None:
        metadata = FileMetadata(url="https://x.org/f.pdf")
        result = _call(
            lambda request: httpx.Response(status, json=_error_body("File rejected")),
            "attach_or_update_file",
            "991",
            metadata,
        )
        assert result.outcome is outcome
        assert result.detail == "File rejected"


# ---------------------------------------------------------------------------
# file type vocabulary
# ---------------------------------------------------------------------------


class TestFileTypes:
    def test_rows_are_mapped(self) -> None:
        body = {
            "row": [
                {"column0": {"value": "PDF"}, "column1": {"value": "Portable Document Format"}},
                {"column0": {"value": "CSV"}},
                {"column0": {"value": ""}, "column1": {"value": "dropped"}},
            ]
        }
        file_types = _call(lambda request: httpx.Response(200, json=body), "list_file_type_vocabulary")
        assert [(t.code, t.description) for t in file_types] == [
            ("PDF", "Portable Document Format"),
            ("CSV", "CSV"),
        ]

    def test_fallback_on_error(self) -> None:
        async def _go():
            async with _gateway(lambda request: httpx.Response(500)) as gateway:
                return await load_file_types(gateway)

        assert asyncio.run(_go()) == list(DEFAULT_FILE_TYPES)

    def test_fallback_on_empty_vocabulary(self, make_gateway) -> None:
        assert asyncio.run(load_file_types(make_gateway(file_types=[]))) == list(DEFAULT_FILE_TYPES)

    def test_fallback_on_exception(self, make_gateway) -> None:
        gateway = make_gateway(file_types=RuntimeError("boom"))
        file_types = asyncio.run(load_file_types(gateway))
        assert [t.code for t in file_types][:3] == ["PDF", "DOC", "DOCX"]
