from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from go_cover_report.__main__ import main
from go_cover_report.cli import app

DATA = Path(__file__).parent / "data"
TWO_FILES = str(DATA / "two_files.out")

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GO_COVER_REPORT_ROOT",
        "GO_COVER_REPORT_SORT",
        "GO_COVER_REPORT_ORDER",
        "GO_COVER_REPORT_COLOR",
        "GO_COVER_REPORT_MIN_COVERAGE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_text_output_lists_files_and_total() -> None:
    result = runner.invoke(app, [TWO_FILES, "--root", "example.com/mod", "--color", "never"])
    assert result.exit_code == 0, result.output
    assert "a.go" in result.output
    assert "b.go" in result.output
    assert "Total" in result.output
    assert "80.00%" in result.output


def test_json_output() -> None:
    result = runner.invoke(
        app,
        [TWO_FILES, "--root", "example.com/mod", "--format", "json", "--sort", "stmt"],
    )
    assert result.exit_code == 0, result.output

    payload = json.loads(result.stdout)
    assert [f["name"] for f in payload["files"]] == ["a.go", "b.go"]
    assert payload["total"]["stmts"] == 10
    assert payload["total"]["missing_stmts"] == 2


def test_exclude_is_repeatable() -> None:
    result = runner.invoke(
        app,
        [TWO_FILES, "--root", "example.com/mod", "-e", "a.go", "-e", "b.go", "--format", "json"],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["files"] == []
    assert payload["total"]["blocks"] == 0


def test_root_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GO_COVER_REPORT_ROOT", "example.com/mod")
    result = runner.invoke(app, [TWO_FILES, "--format", "json"])
    assert result.exit_code == 0, result.output
    assert [f["name"] for f in json.loads(result.stdout)["files"]] == ["a.go", "b.go"]


@pytest.mark.parametrize("args", [["--sort", "bogus"], ["--order", "bogus"]])
def test_invalid_sort_exits_2(args: list[str]) -> None:
    result = runner.invoke(app, [TWO_FILES, *args])
    assert result.exit_code == 2
    assert "CONFIG ERROR" in result.output


def test_missing_profile_exits_2(tmp_path: Path) -> None:
    result = runner.invoke(app, [str(tmp_path / "missing.out")])
    assert result.exit_code == 2
    assert "PROFILE ERROR" in result.output


def test_min_coverage_gate() -> None:
    ok = runner.invoke(app, [TWO_FILES, "--format", "json", "--min-coverage", "80"])
    assert ok.exit_code == 0, ok.output

    failed = runner.invoke(app, [TWO_FILES, "--format", "json", "--min-coverage", "80.5"])
    assert failed.exit_code == 1


def test_min_coverage_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GO_COVER_REPORT_MIN_COVERAGE", "95")
    result = runner.invoke(app, [TWO_FILES, "--format", "json"])
    assert result.exit_code == 1


def test_console_entrypoint(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["go-cover-report", TWO_FILES, "--format", "json"])
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 0
    assert json.loads(capsys.readouterr().out)["total"]["blocks"] == 3
