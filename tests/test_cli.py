"""
tests/test_cli.py

Command line workflow with the remote API replaced by an in-memory gateway.
"""

from __future__ import annotations

import pytest
import yaml
from click.testing import CliRunner

from efk.backend.interface import FileType
from efk.cli import cli
from efk.config.manager import ConfigManager


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def csv_file(tmp_path):
    path = tmp_path / "assets.csv"
    path.write_text(
        "MMS_ID,File URL,Title\n"
        "99123456789012345,https://example.org/f.pdf,Report\n"
        "99123456789012346,https://example.org/g.pdf,Data\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def use_gateway(monkeypatch):
    def _use(gateway):
        monkeypatch.setattr(ConfigManager, "get_gateway", lambda self: gateway)
        return gateway
    return _use


class TestSuggestCommand:
    def test_prints_mapping(self, runner: CliRunner, csv_file) -> None:
        result = runner.invoke(cli, ["suggest", str(csv_file)])
        assert result.exit_code == 0, result.output
        assert "MMS ID" in result.output
        assert "Remote URL" in result.output
        assert "File Title" in result.output

    def test_writes_mapping_file(self, runner: CliRunner, csv_file, tmp_path) -> None:
        output = tmp_path / "mapping.yml"
        result = runner.invoke(cli, ["suggest", str(csv_file), "--output", str(output)])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["columns"] == [
            {"column": "MMS_ID", "field": "record_id"},
            {"column": "File URL", "field": "remote_url"},
            {"column": "Title", "field": "title"},
        ]

    def test_rejects_non_csv(self, runner: CliRunner, tmp_path) -> None:
        path = tmp_path / "assets.txt"
        path.write_text("id\n1\n", encoding="utf-8")
        result = runner.invoke(cli, ["suggest", str(path)])
        assert result.exit_code != 0

    def test_rejects_duplicate_headers(self, runner: CliRunner, tmp_path) -> None:
        path = tmp_path / "dupes.csv"
        path.write_text("ID,ID\n1,2\n", encoding="utf-8")
        result = runner.invoke(cli, ["suggest", str(path)])
        assert result.exit_code != 0


class TestProcessCommand:
    def test_successful_run_writes_ids(self, runner, csv_file, tmp_path, make_gateway, use_gateway) -> None:
        gateway = use_gateway(make_gateway())
        output = tmp_path / "ids.csv"
        result = runner.invoke(cli, ["process", str(csv_file), "--yes", "--delay", "0", "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_bytes() == b"MMS ID\n99123456789012345\n99123456789012346"
        assert gateway.closed
        assert [c[0] for c in gateway.calls] == ["validate", "attach", "validate", "attach"]

    def test_failures_are_reported_not_fatal(self, runner, csv_file, tmp_path, make_gateway, use_gateway, not_found) -> None:
        use_gateway(make_gateway(validations={"99123456789012345": not_found}))
        output = tmp_path / "ids.csv"
        result = runner.invoke(cli, ["process", str(csv_file), "--yes", "--delay", "0", "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert "Asset 99123456789012345 not found" in result.output
        assert "Asset Results" in result.output
        # successes are listed before failures
        results = result.output[result.output.index("Asset Results"):]
        assert results.index("99123456789012346") < results.index("Asset 99123456789012345 not found")
        assert output.read_bytes() == b"MMS ID\n99123456789012346"

    def test_invalid_mapping_aborts(self, runner, csv_file, tmp_path, make_gateway, use_gateway) -> None:
        gateway = use_gateway(make_gateway())
        mapping = tmp_path / "mapping.yml"
        mapping.write_text(yaml.safe_dump({"columns": [{"column": "Title", "field": "title"}]}), encoding="utf-8")
        result = runner.invoke(cli, ["process", str(csv_file), "--mapping", str(mapping), "--yes", "--delay", "0"])

        assert result.exit_code != 0
        assert gateway.calls == []

    def test_interactive_reassignment(self, runner, csv_file, tmp_path, make_gateway, use_gateway) -> None:
        gateway = use_gateway(make_gateway())
        output = tmp_path / "ids.csv"
        # reject the suggestion, ignore the URL column, confirm the run
        answers = "n\nrecord_id\nignore\ntitle\ny\n"
        result = runner.invoke(
            cli,
            ["process", str(csv_file), "--delay", "0", "--output", str(output)],
            input=answers,
        )

        assert result.exit_code == 0, result.output
        assert [c[0] for c in gateway.calls] == ["validate", "validate"]


class TestFileTypesCommand:
    def test_lists_vocabulary(self, runner, make_gateway, use_gateway) -> None:
        use_gateway(make_gateway(file_types=[FileType(code="PDF", description="Portable Document Format")]))
        result = runner.invoke(cli, ["file-types"])
        assert result.exit_code == 0, result.output
        assert "Portable Document Format" in result.output

    def test_falls_back_to_defaults(self, runner, make_gateway, use_gateway) -> None:
        use_gateway(make_gateway(file_types=RuntimeError("offline")))
        result = runner.invoke(cli, ["file-types"])
        assert result.exit_code == 0, result.output
        assert "ZIP Archive" in result.output
