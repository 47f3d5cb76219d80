"""Tests for report rendering."""

from __future__ import annotations

import json

from rich.console import Console

from leakscout.analysis.models import AnalysisReport
from leakscout.report import build_json_report, render_analysis, render_json, render_scan
from leakscout.scanner.models import ScanIssue, ScanResult


def _result(make_finding) -> ScanResult:
    return ScanResult(
        root="/repo",
        findings=[
            make_finding("Generic Secret", file_path="/repo/z.py", line_number=3),
            make_finding(file_path="/repo/a.py", line_number=8),
        ],
        files_scanned=4,
        files_skipped=1,
        errors=[ScanIssue("/repo/locked", "permission denied")],
        duration=0.25,
    )


def test_json_report_structure(make_finding):
    report = build_json_report(_result(make_finding))

    assert report["summary"] == {
        "total_matches": 2,
        "high_severity": 1,
        "medium_severity": 1,
        "low_severity": 0,
    }
    assert [m["file_path"] for m in report["matches"]] == ["/repo/a.py", "/repo/z.py"]
    assert report["matches"][0]["severity"] == "high"
    assert report["matches"][0]["match"] == 'password = "hunter22"'
    assert report["stats"] == {
        "files_scanned": 4,
        "files_skipped": 1,
        "errors": ["/repo/locked: permission denied"],
        "duration": 0.25,
    }


def test_render_json_is_valid(make_finding):
    assert json.loads(render_json(_result(make_finding)))["summary"]["total_matches"] == 2


def _capture() -> Console:
    return Console(record=True, width=120, force_terminal=False)


def test_text_output_lists_findings(make_finding):
    console = _capture()
    render_scan(console, _result(make_finding), "text")
    out = console.export_text()

    assert "Secrets found!" in out
    assert "a.py" in out
    assert "Line 8: Database Password" in out
    assert "Files scanned: 4 (1 skipped)" in out
    assert "1 problem(s)" in out


def test_table_output(make_finding):
    console = _capture()
    render_scan(console, _result(make_finding), "table")
    out = console.export_text()
    assert "Generic Secret" in out
    assert "Total matches: 2" in out


def test_clean_result():
    console = _capture()
    render_scan(console, ScanResult(root="/repo", files_scanned=3), "text")
    assert "No secrets found!" in console.export_text()


def test_analysis_content_is_not_markup():
    console = _capture()
    report = AnalysisReport(
        title="Log Analysis Results",
        model="m",
        content="[red]literal brackets[/red]",
        duration="1s",
    )
    render_analysis(console, report)
    assert "[red]literal brackets[/red]" in console.export_text()
