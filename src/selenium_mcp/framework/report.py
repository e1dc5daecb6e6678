"""
Report rendering for test results.

Three renderings: a plain-text summary, a structured (JSON-ready) document
and an HTML table.
"""

import html
from typing import Any, Dict, Union

from selenium_mcp.models import ReportFormat, TestResults


def render_report(results: TestResults, output_format: ReportFormat = ReportFormat.SUMMARY) -> Union[str, Dict[str, Any]]:
    """Render ``results`` in the requested format."""
    if output_format == ReportFormat.STRUCTURED:
        return _render_structured(results)
    if output_format == ReportFormat.MARKUP:
        return _render_markup(results)
    return _render_summary(results)


def _render_summary(results: TestResults) -> str:
    lines = [
        "Test Execution Report",
        "====================",
        f"Total Tests: {results.total_tests}",
        f"Passed: {results.passed}",
        f"Failed: {results.failures}",
        f"Errors: {results.errors}",
        f"Skipped: {results.skipped}",
        f"Execution Time: {results.time_seconds}s",
        f"Success Rate: {results.success_rate:.2f}%",
    ]
    if results.total_tests == 0:
        lines.append("No tests were run.")
    return "\n".join(lines)


def _render_structured(results: TestResults) -> Dict[str, Any]:
    data = results.to_payload()
    data["success_rate"] = round(results.success_rate, 2)
    return data


def _render_markup(results: TestResults) -> str:
    rows = [
        ("Total Tests", results.total_tests),
        ("Passed", results.passed),
        ("Failed", results.failures),
        ("Errors", results.errors),
        ("Skipped", results.skipped),
        ("Execution Time", f"{results.time_seconds}s"),
        ("Success Rate", f"{results.success_rate:.2f}%"),
    ]
    table = "\n".join(
        f"      <tr><td>{html.escape(label)}</td><td>{html.escape(str(value))}</td></tr>"
        for label, value in rows
    )
    return (
        "<html>\n"
        "  <head><title>Test Report</title></head>\n"
        "  <body>\n"
        "    <h1>Selenium Test Framework Report</h1>\n"
        '    <table border="1">\n'
        f"{table}\n"
        "    </table>\n"
        "  </body>\n"
        "</html>\n"
    )
