"""Tests for the tsmigrate command line."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tsmigrate.cli.app import app

runner = CliRunner()


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["annotate"],
        ["migrate"],
        ["serve"],
        ["serve", "mcp"],
    ],
    ids=["root", "annotate", "migrate", "serve", "serve-mcp"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


class TestAnnotateCommand:
    def test_annotates_code_option(self) -> None:
        result = runner.invoke(app, ["annotate", "--code", "function foo(a) {}"])
        assert result.exit_code == 0
        assert result.stdout == "function foo(a: any) {}"

    def test_annotates_file(self, tmp_path: Path) -> None:
        source = tmp_path / "app.js"
        source.write_text("let test = [];", encoding="utf-8")
        result = runner.invoke(app, ["annotate", str(source)])
        assert result.exit_code == 0
        assert result.stdout == "let test: any[] = [];"
        assert not (tmp_path / "app.ts").exists()

    def test_jsx_language(self) -> None:
        result = runner.invoke(app, ["annotate", "--language", "jsx", "--code", "const A = (p) => <b>{p.x}</b>;"])
        assert result.exit_code == 0
        assert result.stdout.startswith("interface P {\n    x: any,\n}\n\n")

    def test_requires_input(self) -> None:
        result = runner.invoke(app, ["annotate"])
        assert result.exit_code == 1

    def test_strict_rejects_syntax_errors(self) -> None:
        result = runner.invoke(app, ["annotate", "--strict", "--code", "function foo( {"])
        assert result.exit_code == 1
        assert "function foo" not in result.stdout

    def test_unknown_language(self) -> None:
        result = runner.invoke(app, ["annotate", "--language", "cobol", "--code", "let a;"])
        assert result.exit_code == 1


class TestMigrateCommand:
    def test_dry_run(self, tmp_path: Path) -> None:
        (tmp_path / "app.js").write_text("function foo(a) {}", encoding="utf-8")
        result = runner.invoke(app, ["migrate", str(tmp_path), "--dry-run"])
        assert result.exit_code == 0
        assert "Would migrate 1 file(s), unchanged 0, skipped 0, failed 0" in result.stdout
        assert not (tmp_path / "app.ts").exists()

    def test_writes_files(self, tmp_path: Path) -> None:
        (tmp_path / "app.js").write_text("let a;", encoding="utf-8")
        result = runner.invoke(app, ["migrate", str(tmp_path), "--remove-original", "-j", "2"])
        assert result.exit_code == 0
        assert "Migrated 1 file(s)" in result.stdout
        assert (tmp_path / "app.ts").read_text(encoding="utf-8") == "let a: any;"
        assert not (tmp_path / "app.js").exists()

    def test_empty_directory(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["migrate", str(tmp_path)])
        assert result.exit_code == 0
        assert "No JavaScript files found." in result.stdout

    def test_missing_path(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["migrate", str(tmp_path / "missing")])
        assert result.exit_code == 1

    def test_invalid_jobs(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["migrate", str(tmp_path), "--jobs", "0"])
        assert result.exit_code == 2

    def test_reports_unchanged_files(self, tmp_path: Path) -> None:
        (tmp_path / "app.js").write_text("const a = 5;", encoding="utf-8")
        result = runner.invoke(app, ["migrate", str(tmp_path)])
        assert result.exit_code == 0
        assert "Migrated 0 file(s), unchanged 1, skipped 0, failed 0" in result.stdout
        assert (tmp_path / "app.ts").read_text(encoding="utf-8") == "const a = 5;"
