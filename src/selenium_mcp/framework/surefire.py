"""
Surefire result file parsing.

Reads the suite-level counts from the XML report Maven Surefire writes after
a test run.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional

from selenium_mcp.errors import NotFoundError, ParseFailureError
from selenium_mcp.models import TestResults

logger = logging.getLogger(__name__)


class SurefireReader:
    """Locates and parses the most recent surefire result file."""

    def __init__(self, reports_dir: Path, results_file: str = "TEST-TestSuite.xml"):
        self.reports_dir = Path(reports_dir)
        self.results_file = results_file

    def latest_report(self) -> Path:
        """
        Find the result file to read.

        The configured suite file wins; otherwise the newest ``TEST-*.xml``
        in the reports directory is used.

        Raises:
            NotFoundError: If no result file exists yet
        """
        if not self.reports_dir.is_dir():
            raise NotFoundError("No test results found. Run tests first.")

        suite_file = self.reports_dir / self.results_file
        if suite_file.is_file():
            return suite_file

        candidates = []
        for path in self.reports_dir.glob("TEST-*.xml"):
            try:
                if path.is_file():
                    candidates.append((path.stat().st_mtime, path))
            except OSError:
                # Removed by a concurrent Maven run
                continue
        if not candidates:
            raise NotFoundError(
                "Test suite file not found",
                {"path": str(suite_file)},
            )
        return max(candidates)[1]

    def read_results(self) -> TestResults:
        """
        Parse the latest result file into counts.

        Raises:
            NotFoundError: If no result file exists yet
            ParseFailureError: If the file is not a readable surefire report
        """
        path = self.latest_report()
        logger.debug(f"Reading test results from {path}")

        try:
            root = ET.parse(path).getroot()
        except FileNotFoundError as e:
            raise NotFoundError(
                "Test suite file not found",
                {"path": str(path)},
            ) from e
        except (ET.ParseError, OSError) as e:
            raise ParseFailureError(
                f"Failed to parse results: {e}",
                {"path": str(path)},
            ) from e

        # A <testsuites> wrapper is summed over its suites
        suites = [root] if root.tag == "testsuite" else root.findall("testsuite")
        if not suites:
            raise ParseFailureError(
                f"Failed to parse results: no <testsuite> element in {path.name}",
                {"path": str(path)},
            )

        try:
            results = TestResults(
                total_tests=sum(_int_attr(s.get("tests")) for s in suites),
                failures=sum(_int_attr(s.get("failures")) for s in suites),
                errors=sum(_int_attr(s.get("errors")) for s in suites),
                skipped=sum(_int_attr(s.get("skipped")) for s in suites),
                time_seconds=sum(_float_attr(s.get("time")) for s in suites),
                report_file=str(path),
            )
        except ValueError as e:
            raise ParseFailureError(
                f"Failed to parse results: {e}",
                {"path": str(path)},
            ) from e

        if results.failures + results.errors > results.total_tests:
            raise ParseFailureError(
                f"Failed to parse results: {results.failures} failures and "
                f"{results.errors} errors exceed {results.total_tests} tests",
                {"path": str(path)},
            )
        return results


def _int_attr(value: Optional[str]) -> int:
    if value is None or value == "":
        return 0
    return int(value)


def _float_attr(value: Optional[str]) -> float:
    if value is None or value == "":
        return 0.0
    # Surefire may write times with a thousands separator (e.g. "1,234.5")
    return float(value.replace(",", ""))
