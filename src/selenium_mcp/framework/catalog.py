"""
Test discovery over the project's Java sources.

Test classes are the *.java files of the configured tests directory; test
methods are found by scanning for TestNG's ``@Test public void name`` marker.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from selenium_mcp.errors import NotFoundError, ParseFailureError

logger = logging.getLogger(__name__)

TEST_METHOD_PATTERN = re.compile(r"@Test(?:\([^)]*\))?\s+public\s+void\s+(\w+)")


class TestCatalog:
    """Lists test classes and their test methods."""

    __test__ = False

    def __init__(self, tests_dir: Path):
        self.tests_dir = Path(tests_dir)

    def list_tests(self, test_class: Optional[str] = None) -> Dict[str, List[str]]:
        """
        Map each test class to its test method names.

        Args:
            test_class: Only include this class (an unknown name yields {})

        Returns:
            Dict of class name to method names, in file order

        Raises:
            NotFoundError: If the tests directory does not exist
            ParseFailureError: If a test source cannot be read
        """
        if not self.tests_dir.is_dir():
            raise NotFoundError(
                "Tests directory not found",
                {"path": str(self.tests_dir)},
            )

        tests: Dict[str, List[str]] = {}
        for source in sorted(self.tests_dir.glob("*.java")):
            class_name = source.stem
            if test_class and class_name != test_class:
                continue
            if not source.is_file():
                continue
            try:
                content = source.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise ParseFailureError(
                    f"Failed to read {source.name}: {e}",
                    {"path": str(source)},
                ) from e
            tests[class_name] = TEST_METHOD_PATTERN.findall(content)

        logger.debug(f"Found {len(tests)} test classes in {self.tests_dir}")
        return tests

    def count(self) -> int:
        """Total number of test methods across all classes."""
        return sum(len(methods) for methods in self.list_tests().values())
