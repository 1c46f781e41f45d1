# Copyright 2026 plugsig Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the plugsig CLI entry point."""

import json
import shutil
import sys
from pathlib import Path

import pytest

from plugsig.cli.main import main

DATA_DIR = Path(__file__).parent.parent / "data" / "schemas"

# ###############
# Helpers
# ###############


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    """Run main() with *args* and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["plugsig", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "usage: plugsig" in capsys.readouterr().out


# -------- check tests --------


def test_check_valid_file(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """check on a valid, documented schema reports no issues."""
    assert _run(monkeypatch, "check", str(DATA_DIR / "valid" / "mtg.yaml")) == 0
    out = capsys.readouterr().out
    assert "Checking 1 schema file(s)..." in out
    assert "No issues found." in out


def test_check_prints_warnings_but_succeeds(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Undocumented commands are warnings, not errors."""
    assert _run(monkeypatch, "check", str(DATA_DIR / "valid" / "syn.yaml")) == 0
    out = capsys.readouterr().out
    assert "Warning: syn.yaml: command 'syn note info' has no usage text" in out
    assert "No issues found." in out


def test_check_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """check searches a directory recursively for schema files."""
    shutil.copy(DATA_DIR / "valid" / "mtg.yaml", tmp_path / "mtg.yaml")
    (tmp_path / "nested").mkdir()
    shutil.copy(DATA_DIR / "valid" / "syn.yaml", tmp_path / "nested" / "syn.yml")
    (tmp_path / "notes.txt").write_text("not a schema")
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "Checking 2 schema file(s)..." in capsys.readouterr().out


def test_check_empty_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "check", str(tmp_path)) == 0
    assert "No schema files found." in capsys.readouterr().out


def test_check_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    shutil.copy(DATA_DIR / "valid" / "mtg.yaml", tmp_path / "mtg.yaml")
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check") == 0
    assert "Checking 1 schema file(s)..." in capsys.readouterr().out


def test_check_reports_schema_errors(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Compile errors go to stderr and the exit code is 1."""
    assert _run(monkeypatch, "check", str(DATA_DIR / "invalid" / "ordering.yaml")) == 1
    captured = capsys.readouterr()
    assert "Error: ordering.yaml:" in captured.err
    assert "required field 'id' may not follow optional or flag arguments" in captured.err
    assert "No issues found." not in captured.out


def test_check_reports_unloadable_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("commands: [\n")
    assert _run(monkeypatch, "check", str(bad)) == 1
    assert "Invalid YAML" in capsys.readouterr().err


def test_check_missing_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "check", str(tmp_path / "missing")) == 1
    assert "does not exist" in capsys.readouterr().err


# -------- signatures tests --------


def test_signatures_to_stdout(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "signatures", str(DATA_DIR / "valid" / "mtg.yaml")) == 0
    obj = json.loads(capsys.readouterr().out)
    assert [s["name"] for s in obj["signatures"]] == ["mtg tutor", "mtg search"]
    assert obj["signatures"][0]["params"][1] == {
        "name": "fuzzy",
        "role": "switch",
        "shape": "Boolean",
        "usage": "If set, will search for cards using a fuzzy match on the card name.",
        "short": "f",
    }


def test_signatures_to_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    output = tmp_path / "out" / "syn.signatures.json"
    assert _run(monkeypatch, "signatures", str(DATA_DIR / "valid" / "syn.yaml"), "-o", str(output)) == 0
    assert "Wrote 4 signature(s)" in capsys.readouterr().out
    assert output.exists()


def test_signatures_invalid_schema(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    assert _run(monkeypatch, "signatures", str(DATA_DIR / "invalid" / "ordering.yaml")) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error: command 'lookup'")


def test_signatures_missing_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    assert _run(monkeypatch, "signatures", str(tmp_path / "missing.yaml")) == 1
    assert "Schema file not found" in capsys.readouterr().err


def test_verbose_flag_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "-v", "signatures", str(DATA_DIR / "valid" / "mtg.yaml")) == 0
