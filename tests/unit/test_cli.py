"""
Integration tests for the fuzzgrep CLI.

Tests option handling, output format and error handling.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fuzzgrep.cli import INVALID_WORKERS_MESSAGE, app
from fuzzgrep.services import MISSING_PATTERN_MESSAGE

runner = CliRunner()


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("hello world\nfoo bar\n", encoding="utf-8")
    (tmp_path / "b.go").write_text("hello there\n", encoding="utf-8")
    return tmp_path


def _found_lines(stdout: str) -> set[str]:
    return {line for line in stdout.splitlines() if line.startswith("Found in ")}


class TestCLIHelp:
    def test_help_lists_options(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for option in ("--pattern", "--path", "--workers", "--ext"):
            assert option in result.stdout


class TestCLISearch:
    def test_search_without_filter(self, tree: Path):
        result = runner.invoke(app, ["--pattern", "hello", "--path", str(tree)])

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == {
            f"Found in {tree / 'a.txt'}:1: hello world",
            f"Found in {tree / 'b.go'}:1: hello there",
        }

    def test_search_with_extension_filter(self, tree: Path):
        result = runner.invoke(
            app, ["--pattern", "hello", "--path", str(tree), "--ext", ".go", "-w", "2"]
        )

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == {f"Found in {tree / 'b.go'}:1: hello there"}

    def test_missing_pattern_is_usage_error(self, tree: Path):
        result = runner.invoke(app, ["--path", str(tree)])

        assert result.exit_code == 1
        assert MISSING_PATTERN_MESSAGE in result.stdout
        assert _found_lines(result.stdout) == set()

    def test_empty_pattern_is_usage_error(self, tree: Path):
        result = runner.invoke(app, ["--pattern", "", "--path", str(tree)])

        assert result.exit_code == 1
        assert MISSING_PATTERN_MESSAGE in result.stdout

    def test_non_positive_workers_warns_and_runs(self, tree: Path):
        result = runner.invoke(
            app, ["--pattern", "hello", "--path", str(tree), "--workers", "0"]
        )

        assert result.exit_code == 0
        assert INVALID_WORKERS_MESSAGE in result.stdout
        assert len(_found_lines(result.stdout)) == 2

    def test_missing_root_still_exits_normally(self, tmp_path: Path):
        result = runner.invoke(
            app, ["--pattern", "hello", "--path", str(tmp_path / "missing")]
        )

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == set()


class TestCLIConfig:
    def test_config_file_supplies_extensions(self, tree: Path, tmp_path: Path):
        config_file = tmp_path / "fuzzgrep.yaml"
        config_file.write_text("search:\n  extensions: ['.txt']\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["--pattern", "hello", "--path", str(tree), "--config", str(config_file)],
        )

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == {f"Found in {tree / 'a.txt'}:1: hello world"}

    def test_ext_option_overrides_config(self, tree: Path, tmp_path: Path):
        config_file = tmp_path / "fuzzgrep.yaml"
        config_file.write_text("search:\n  extensions: ['.txt']\n", encoding="utf-8")

        result = runner.invoke(
            app,
            [
                "--pattern", "hello",
                "--path", str(tree),
                "--config", str(config_file),
                "--ext", ".go",
            ],
        )

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == {f"Found in {tree / 'b.go'}:1: hello there"}

    def test_missing_config_file_is_error(self, tree: Path):
        result = runner.invoke(
            app,
            ["--pattern", "hello", "--path", str(tree), "--config", str(tree / "nope.yaml")],
        )

        assert result.exit_code == 1
        assert "Configuration file not found" in result.stdout

    def test_env_override_for_extensions(self, tree: Path, monkeypatch):
        monkeypatch.setenv("FUZZGREP_SEARCH_EXTENSIONS", ".go")

        result = runner.invoke(app, ["--pattern", "hello", "--path", str(tree)])

        assert result.exit_code == 0
        assert _found_lines(result.stdout) == {f"Found in {tree / 'b.go'}:1: hello there"}

    def test_error_text_with_brackets_is_printed_literally(self, tree: Path, monkeypatch):
        monkeypatch.chdir(tree)

        result = runner.invoke(
            app, ["--pattern", "hello", "--path", ".", "--config", "[red]nope.yaml"]
        )

        assert result.exit_code == 1
        assert "Configuration file not found: [red]nope.yaml" in result.stdout
