"""Tests for CLI parser and command behavior."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from usercss.cli.handlers import UsageError, collect_values
from usercss.cli.main import build_parser, main

BROKEN = "/* ==UserStyle==\n@name Broken\nbody {}\n"


@pytest.fixture()
def dark_docs(styles_root: Path) -> str:
    return str(styles_root / "dark-docs.user.css")


def test_build_parser_accepts_compile_flags(tmp_path: Path) -> None:
    parser = build_parser()

    args = parser.parse_args(
        ["compile", "style.user.css", "-s=--bg=#000", "--set=--fg=#fff", "-o", str(tmp_path / "out.css")]
    )

    assert args.command == "compile"
    assert args.file == Path("style.user.css")
    assert args.assignments == ["--bg=#000", "--fg=#fff"]
    assert args.output == tmp_path / "out.css"
    assert args.output_format == "css"


def test_compile_rejects_unknown_format() -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["compile", "a.css", "--format", "sarif"])

    assert excinfo.value.code == 2


def test_compile_prints_summary(dark_docs: str, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["compile", dark_docs, "--no-color"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Dark Docs 1.2.0" in out
    assert "domain(docs.example.com)" in out
    assert "Verdict     OK" in out


def test_compile_writes_css_with_values(dark_docs: str, tmp_path: Path) -> None:
    out_path = tmp_path / "dark.css"

    code = main(["compile", dark_docs, "--set=--bg=#101010", "-o", str(out_path), "--no-stdout"])

    assert code == 0
    css = out_path.read_text(encoding="utf-8")
    assert "background: #101010;" in css
    assert "/*[[" not in css


def test_compile_writes_json_record(dark_docs: str, tmp_path: Path) -> None:
    values_path = tmp_path / "values.json"
    values_path.write_text(json.dumps({"--size": 20, "--bg": "#222222"}), encoding="utf-8")
    out_path = tmp_path / "dark.json"

    code = main(["compile", dark_docs, "--values", str(values_path), "-o", str(out_path), "--format", "json"])

    assert code == 0
    record = json.loads(out_path.read_text(encoding="utf-8"))
    assert record["variables"]["--size"]["value"] == "20"
    assert record["variables"]["--bg"]["value"] == "#222222"


def test_compile_returns_one_for_style_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "broken.user.css"
    source.write_text(BROKEN, encoding="utf-8")

    code = main(["compile", str(source), "--no-color"])

    assert code == 1
    assert "BLOCKED" in capsys.readouterr().out


def test_compile_missing_file_is_usage_problem(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["compile", str(tmp_path / "absent.user.css")])

    assert code == 2
    assert "Input error" in capsys.readouterr().err


def test_compile_bad_config_exits_two(dark_docs: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "usercss.yaml").write_text("max_source_bytes: nope\n", encoding="utf-8")

    code = main(["compile", dark_docs, "-r", str(tmp_path)])

    assert code == 2
    assert "CFG005" in capsys.readouterr().err


def test_compile_bad_assignment_exits_two(dark_docs: str, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["compile", dark_docs, "-s", "no-equals-sign"])

    assert code == 2
    assert "NAME=VALUE" in capsys.readouterr().err


def test_collect_values_flags_override_file(tmp_path: Path) -> None:
    values_path = tmp_path / "values.json"
    values_path.write_text(json.dumps({"a": "1", "b": True}), encoding="utf-8")

    values = collect_values(["a=2", "c=x=y"], values_path)

    assert values == {"a": "2", "b": "1", "c": "x=y"}


def test_collect_values_rejects_non_object(tmp_path: Path) -> None:
    values_path = tmp_path / "values.json"
    values_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(UsageError, match="JSON object"):
        collect_values([], values_path)


def test_match_reports_each_url(dark_docs: str, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["match", dark_docs, "https://docs.example.com/a", "https://example.com/docs/b", "--no-color"])
    out = capsys.readouterr().out

    assert code == 0
    assert out.count("MATCH") == 2


def test_match_exit_one_when_any_url_misses(dark_docs: str, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["match", dark_docs, "https://docs.example.com/", "https://elsewhere.test/", "--no-color"])
    out = capsys.readouterr().out

    assert code == 1
    assert "SKIP   https://elsewhere.test/" in out


def test_match_against_stored_record(dark_docs: str, tmp_path: Path) -> None:
    record_path = tmp_path / "dark.json"
    assert main(["compile", dark_docs, "-o", str(record_path), "--format", "json", "--no-stdout"]) == 0

    assert main(["match", "--record", str(record_path), "https://docs.example.com/", "--no-stdout"]) == 0
    assert main(["match", "--record", str(record_path), "https://nope.test/", "--no-stdout"]) == 1


def test_match_rejects_invalid_record(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    record_path = tmp_path / "bad.json"
    record_path.write_text(json.dumps({"schema_version": 1}), encoding="utf-8")

    code = main(["match", "--record", str(record_path), "https://a.test/"])

    assert code == 2
    assert "Record error" in capsys.readouterr().err


def test_match_needs_a_url(dark_docs: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["match", dark_docs])

    assert excinfo.value.code == 2
