"""Tests for the CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from leakscout import __version__
from leakscout.analysis.errors import ChunkAnalysisError, InferenceUnavailableError
from leakscout.analysis.models import AnalysisReport
from leakscout.analysis.orchestrator import Analyzer
from leakscout.cli import common, main


@pytest.fixture
def runner(monkeypatch, tmp_path: Path) -> CliRunner:
    for suffix in ("OLLAMA_URL", "MODEL", "CHUNK_LINES", "MAX_FILE_SIZE", "TIMEOUT", "WORKERS"):
        monkeypatch.delenv(f"LEAKSCOUT_{suffix}", raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


class TestMain:
    def test_help(self, runner: CliRunner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("scan", "logai", "patterns"):
            assert command in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config_file(self, runner: CliRunner, tmp_path: Path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("just a string\n")
        result = runner.invoke(main, ["--config", str(bad), "patterns"])
        assert result.exit_code == 1
        assert "must be a mapping" in result.output


class TestPatterns:
    def test_lists_catalog(self, runner: CliRunner):
        result = runner.invoke(main, ["patterns"])
        assert result.exit_code == 0
        assert "AWS Access Key" in result.output
        assert "PagerDuty Token" in result.output

    def test_severity_filter(self, runner: CliRunner):
        result = runner.invoke(main, ["patterns", "--severity", "medium"])
        assert result.exit_code == 0
        assert "Generic Secret" in result.output
        assert "AWS Access Key" not in result.output


class TestScan:
    def test_findings_exit_one(self, runner: CliRunner, project_tree: Path):
        result = runner.invoke(main, ["scan", str(project_tree)])
        assert result.exit_code == 1
        assert "Secrets found!" in result.output
        assert "Database Password" in result.output

    def test_clean_tree_exit_zero(self, runner: CliRunner, tmp_path: Path):
        clean = tmp_path / "clean"
        clean.mkdir()
        (clean / "main.py").write_text("print('hi')\n")
        result = runner.invoke(main, ["scan", str(clean)])
        assert result.exit_code == 0
        assert "No secrets found!" in result.output

    def test_json_report_file(self, runner: CliRunner, project_tree: Path, tmp_path: Path):
        out = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", str(project_tree), "--json", "-o", str(out)])

        assert result.exit_code == 1
        report = json.loads(out.read_text())
        assert report["summary"]["total_matches"] == 3
        assert report["stats"]["files_scanned"] == 2
        assert report["stats"]["files_skipped"] == 2

    def test_severity_and_exclusions(self, runner: CliRunner, project_tree: Path, tmp_path: Path):
        out = tmp_path / "report.json"
        result = runner.invoke(
            main,
            ["scan", str(project_tree), "-S", "medium", "--exclude-file", "clean.py", "-o", str(out)],
        )

        assert result.exit_code == 1
        report = json.loads(out.read_text())
        assert {m["severity"] for m in report["matches"]} == {"medium"}
        assert report["stats"]["files_scanned"] == 1

    def test_max_size_option(self, runner: CliRunner, project_tree: Path, tmp_path: Path):
        out = tmp_path / "report.json"
        result = runner.invoke(main, ["scan", str(project_tree), "--max-size", "0", "-o", str(out)])
        assert result.exit_code == 0
        assert json.loads(out.read_text())["stats"]["files_scanned"] == 0

    def test_bad_max_size(self, runner: CliRunner, project_tree: Path):
        result = runner.invoke(main, ["scan", str(project_tree), "--max-size", "lots"])
        assert result.exit_code == 2

    def test_ai_summary(self, runner: CliRunner, project_tree: Path):
        analyzer = MagicMock()
        analyzer.summarize_findings.return_value = AnalysisReport(
            title="AI-Powered Secrets Security Analysis Report",
            model="test-model",
            content="rotate the database password",
            duration="1.0s",
        )
        with patch("leakscout.cli.scan.connect_analyzer", return_value=analyzer):
            result = runner.invoke(main, ["scan", str(project_tree), "--ai"])

        assert result.exit_code == 1
        assert "rotate the database password" in result.output
        assert len(analyzer.summarize_findings.call_args.args[0]) == 3

    def test_json_mode_sends_analysis_to_stderr(self, runner: CliRunner, project_tree: Path):
        analyzer = MagicMock()
        analyzer.summarize_findings.return_value = AnalysisReport("t", "m", "c", "d")
        with patch("leakscout.cli.scan.connect_analyzer", return_value=analyzer), patch(
            "leakscout.cli.scan.render_analysis"
        ) as render:
            result = runner.invoke(main, ["scan", str(project_tree), "--json", "--ai"])

        assert result.exit_code == 1
        assert render.call_args.args[0] is common.console

    def test_ai_failure(self, runner: CliRunner, project_tree: Path):
        analyzer = MagicMock()
        analyzer.summarize_findings.side_effect = ChunkAnalysisError(
            1, 1, InferenceUnavailableError("down")
        )
        with patch("leakscout.cli.scan.connect_analyzer", return_value=analyzer):
            result = runner.invoke(main, ["scan", str(project_tree), "--ai"])

        assert result.exit_code == 1
        assert "analysis failed" in result.output

    def test_ollama_down(self, runner: CliRunner, project_tree: Path):
        with patch(
            "leakscout.cli.common.InferenceClient.health_check",
            side_effect=InferenceUnavailableError("connection refused"),
        ):
            result = runner.invoke(main, ["scan", str(project_tree), "--ai"])

        assert result.exit_code == 1
        assert "ollama serve" in result.output


class TestLogai:
    def test_summarizes_log(self, runner: CliRunner, tmp_path: Path, fake_ollama):
        log = tmp_path / "app.log"
        log.write_text("".join(f"request {i} ok\n" for i in range(5)))
        analyzer = Analyzer(fake_ollama.client(), chunk_lines=2)

        with patch("leakscout.cli.logai.connect_analyzer", return_value=analyzer):
            result = runner.invoke(main, ["logai", str(log)])

        assert result.exit_code == 0, result.output
        assert "=== Chunk 3 Summary ===" in result.output
        assert len(fake_ollama.prompts) == 3

    def test_chunk_lines_option_reaches_config(self, runner: CliRunner, tmp_path: Path):
        log = tmp_path / "app.log"
        log.write_text("x\n")
        seen = {}

        def _connect(config):
            seen["chunk_lines"] = config.chunk_lines
            seen["model"] = config.model
            analyzer = MagicMock()
            analyzer.analyze_log_file.return_value = AnalysisReport("t", "m", "c", "d")
            return analyzer

        with patch("leakscout.cli.logai.connect_analyzer", side_effect=_connect):
            result = runner.invoke(
                main, ["logai", str(log), "--chunk-lines", "50", "--model", "llama3"]
            )

        assert result.exit_code == 0, result.output
        assert seen == {"chunk_lines": 50, "model": "llama3"}

    def test_empty_log(self, runner: CliRunner, tmp_path: Path, fake_ollama):
        log = tmp_path / "empty.log"
        log.write_text("")
        with patch(
            "leakscout.cli.logai.connect_analyzer",
            return_value=Analyzer(fake_ollama.client()),
        ):
            result = runner.invoke(main, ["logai", str(log)])

        assert result.exit_code == 1
        assert "nothing to analyze" in result.output
