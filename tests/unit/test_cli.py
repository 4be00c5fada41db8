"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from atomcss.cli import app
from atomcss.cli.generate import print_report
from atomcss.core.pipeline import GenerationReport, GenerationStatus
from atomcss.core.project import ProjectScan


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(mini_program) -> Path:
    """Create a mini program using a few atomic class names."""
    return mini_program(
        ["pages/index/index"],
        {"pages/index/index.wxml": '<view class="px-20 text-red-6 unknown-thing"></view>'},
    )


class TestGenerate:
    """Tests for the generate command."""

    def test_generate_writes_files(self, cli_runner, project):
        result = cli_runner.invoke(app, ["generate", str(project)])
        assert result.exit_code == 0, result.output
        work_dir = project / "miniprogram"
        assert ".text-red-6 {" in (work_dir / "min.wxss").read_text()
        assert "--color-red-6: #cf1322;" in (work_dir / "var.wxss").read_text()
        assert "unknown-thing" in result.output

    def test_second_run_regenerates(self, cli_runner, project):
        """Generated files are not treated as declarations."""
        cli_runner.invoke(app, ["generate", str(project)])
        result = cli_runner.invoke(app, ["generate", str(project)])
        assert result.exit_code == 0, result.output

    def test_nothing_to_create(self, cli_runner, mini_program):
        root = mini_program(["pages/index/index"], {"pages/index/index.wxml": "<view></view>"})
        result = cli_runner.invoke(app, ["generate", str(root)])
        assert result.exit_code == 1
        assert "No class names to create" in result.output

    def test_nothing_resolved(self, cli_runner, mini_program):
        root = mini_program(["pages/index/index"], {"pages/index/index.wxml": '<view class="hero-x"></view>'})
        result = cli_runner.invoke(app, ["generate", str(root)])
        assert result.exit_code == 2

    def test_not_a_project(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["generate", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_config_option(self, cli_runner, project, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text('[files]\ncss_output_file = "atomic.wxss"\n')
        result = cli_runner.invoke(app, ["generate", str(project), "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert (project / "miniprogram" / "atomic.wxss").is_file()

    def test_missing_config_option(self, cli_runner, project, tmp_path):
        result = cli_runner.invoke(app, ["generate", str(project), "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestInspect:
    """Tests for resolve, rules and themes."""

    def test_resolve(self, cli_runner):
        result = cli_runner.invoke(app, ["resolve", "px-20"])
        assert result.exit_code == 0, result.output
        assert "padding-left: var(--unit-20);" in result.output
        assert "--unit-20: 2.667vmin;" in result.output

    def test_resolve_unmatched(self, cli_runner):
        result = cli_runner.invoke(app, ["resolve", "hero-x"])
        assert result.exit_code == 2
        assert "no rule matches" in result.output

    def test_resolve_bad_color(self, cli_runner):
        """Value errors are fatal for resolve."""
        result = cli_runner.invoke(app, ["resolve", "bg-teal-2"])
        assert result.exit_code == 1
        assert "teal" in result.output

    def test_rules(self, cli_runner):
        result = cli_runner.invoke(app, ["rules", "--package", "layout.flex"])
        assert result.exit_code == 0, result.output
        assert "layout.flex.core" in result.output

    def test_rules_no_match(self, cli_runner):
        result = cli_runner.invoke(app, ["rules", "--package", "does.not.exist"])
        assert result.exit_code == 0
        assert "No rules found" in result.output

    def test_themes(self, cli_runner):
        result = cli_runner.invoke(app, ["themes"])
        assert result.exit_code == 0, result.output
        assert "geekblue" in result.output

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "atomcss" in result.output


class TestPrintReport:
    """Tests for the generation summary."""

    def test_report_without_result(self, capsys):
        """A report that carries no batch result prints nothing."""
        print_report(GenerationReport(status=GenerationStatus.NOTHING_RESOLVED, scan=ProjectScan()))
        assert capsys.readouterr().out == ""
