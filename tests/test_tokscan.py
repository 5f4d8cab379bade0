"""Tests for main TOKSCAN functionality."""

import json
import pytest
from pathlib import Path
from argparse import Namespace
from tokscan.tokscan import parser, run, main, settings_resolve, __version__
from tokscan.config.settings import App


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    inputdir = tmp_path / "incoming"
    outputdir = tmp_path / "outgoing"
    inputdir.mkdir()
    outputdir.mkdir()
    return inputdir, outputdir


def options_parse(*args: str) -> Namespace:
    return parser.parse_args(list(args))


def test_version_output(capsys):
    with pytest.raises(SystemExit) as exit_info:
        parser.parse_args(["-V"])
    assert exit_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_option_defaults():
    options = options_parse()
    assert options.var == []
    assert options.open is None
    assert options.defaults is False
    assert options.strict is False


def test_settings_resolve_overrides():
    base = App()
    options = options_parse(
        "--open", "{{", "--close", "}}", "--pattern", "*.md",
        "--defaults", "--separator", "|", "--strict",
    )
    settings = settings_resolve(options, base)
    assert settings.openToken == "{{"
    assert settings.closeToken == "}}"
    assert settings.filePattern == "*.md"
    assert settings.defaultValueEnabled is True
    assert settings.defaultValueSeparator == "|"
    assert settings.strict is True
    assert base.openToken == "${"


def test_settings_resolve_keeps_base():
    base = App(openToken="<%", closeToken="%>")
    settings = settings_resolve(options_parse(), base)
    assert settings.openToken == "<%"
    assert settings.closeToken == "%>"
    assert settings.strict is False


def test_run(dirs, tmp_path: Path, monkeypatch):
    monkeypatch.setattr("tokscan.tokscan.appsettings", App())
    inputdir, outputdir = dirs
    vars_file = tmp_path / "vars.json"
    vars_file.write_text(json.dumps({"greeting": "Hello", "name": "file"}))
    (inputdir / "letter.txt").write_text(
        "${greeting} ${name}, port ${port:80} \\${literal}", encoding="utf-8"
    )

    options = options_parse(
        "--vars", str(vars_file), "--var", "name=world", "--defaults"
    )
    summary = run(options, inputdir, outputdir)

    assert summary.rendered == 1
    assert summary.failed == 0
    assert (outputdir / "letter.txt").read_text(encoding="utf-8") == (
        "Hello world, port 80 ${literal}"
    )


def test_run_strict_failure(dirs, monkeypatch):
    monkeypatch.setattr("tokscan.tokscan.appsettings", App())
    inputdir, outputdir = dirs
    (inputdir / "a.txt").write_text("${missing}", encoding="utf-8")

    summary = run(options_parse("--strict"), inputdir, outputdir)

    assert summary.rendered == 0
    assert summary.failed == 1
    assert "Variable not found: missing" in summary.errors[0]
    assert not (outputdir / "a.txt").exists()


def test_run_bad_pair(dirs):
    inputdir, outputdir = dirs
    with pytest.raises(ValueError):
        run(options_parse("--var", "oops"), inputdir, outputdir)


def test_run_missing_vars_file(dirs, tmp_path: Path):
    inputdir, outputdir = dirs
    with pytest.raises(ValueError, match="Error reading file"):
        run(options_parse("--vars", str(tmp_path / "nope.json")), inputdir, outputdir)


def test_main_missing_vars_file_exits(dirs, tmp_path: Path, capsys):
    inputdir, outputdir = dirs
    options = options_parse("--vars", str(tmp_path / "nope.json"))
    with pytest.raises(SystemExit) as exit_info:
        main(options, inputdir, outputdir)
    assert exit_info.value.code == 1
    assert "Error" in capsys.readouterr().out
