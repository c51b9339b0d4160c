import json
import sys
from pathlib import Path

import pytest

from tl import tl_cli

SOURCE = "func f is var x : i32 := 5; end"


def test_run_tl_string_input_unwrites(capsys: pytest.CaptureFixture[str]) -> None:
    status = tl_cli.run_tl(source=SOURCE, is_string=True)
    out = capsys.readouterr().out
    assert status == 0
    assert out == "func f is\n    var x : i32 := 5;\nend\n"


def test_run_tl_file_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    file_path = tmp_path / "input.tl"
    file_path.write_text(SOURCE)
    assert tl_cli.run_tl(source=str(file_path)) == 0
    assert "var x : i32 := 5;" in capsys.readouterr().out


def test_run_tl_rejects_other_extensions() -> None:
    with pytest.raises(ValueError, match=r"\.tl"):
        tl_cli.run_tl(source="input.txt")


def test_run_tl_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status = tl_cli.run_tl(source=str(tmp_path / "missing.tl"))
    assert status == 1
    assert "Fatal Error!" in capsys.readouterr().out


def test_run_tl_ast_dump(capsys: pytest.CaptureFixture[str]) -> None:
    assert tl_cli.run_tl(source=SOURCE, is_string=True, ast=True) == 0
    data = json.loads(capsys.readouterr().out)
    (func,) = data["functions"]
    assert func["name"] == "f"
    (stmt,) = func["block"]["statements"]
    assert stmt["kind"] == "var_dec"
    assert stmt["data_type"] == "i32"
    assert stmt["expr"]["kind"] == "assign"


def test_run_tl_token_dump(capsys: pytest.CaptureFixture[str]) -> None:
    assert tl_cli.run_tl(source="func f", is_string=True, tokens=True) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["1:1 Token(FUNC, func)", "1:6 Token(IDENT, f)", "1:7 Token(EOF, EOF)"]


def test_run_tl_prints_diagnostics_and_continues(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert tl_cli.run_tl(source="func is end", is_string=True) == 0
    out = capsys.readouterr().out
    assert "Error: " in out
    assert "Expected function name." in out
    assert "func  is" in out


def test_run_tl_strict_fails_on_diagnostics(capsys: pytest.CaptureFixture[str]) -> None:
    assert tl_cli.run_tl(source="func is end", is_string=True, strict=True) == 1
    out = capsys.readouterr().out
    assert "Expected function name." in out
    assert "func  is" not in out


def test_run_tl_lexer_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert tl_cli.run_tl(source='func f is print("oops); end', is_string=True) == 1
    assert "Unterminated string" in capsys.readouterr().out


def test_run_tl_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output_path = tmp_path / "out.tl"
    assert tl_cli.run_tl(source=SOURCE, is_string=True, out=str(output_path)) == 0
    assert capsys.readouterr().out == ""
    assert output_path.read_text() == "func f is\n    var x : i32 := 5;\nend\n"


def test_main_invokes_run_tl(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["tl", "-s", SOURCE])
    with pytest.raises(SystemExit) as info:
        tl_cli.main()
    assert info.value.code == 0
    assert "func f is" in capsys.readouterr().out


def test_main_rejects_bad_extension(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["tl", "notes.txt"])
    with pytest.raises(SystemExit) as info:
        tl_cli.main()
    assert info.value.code == 2
