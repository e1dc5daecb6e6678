"""
Project metadata from pom.xml and README.md.

Missing files or fields yield "unknown" placeholders rather than errors.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Optional

from selenium_mcp.config import ProjectConfig
from selenium_mcp.framework.catalog import TestCatalog
from selenium_mcp.models import FrameworkInfo

logger = logging.getLogger(__name__)

README_EXCERPT_CHARS = 500
UNKNOWN = "unknown"


def read_pom_versions(pom_path: Path) -> Dict[str, str]:
    """Read project, Selenium and TestNG versions from a Maven POM."""
    versions = {
        "project_version": UNKNOWN,
        "selenium_version": UNKNOWN,
        "testng_version": UNKNOWN,
    }
    if not pom_path.is_file():
        return versions

    try:
        root = ET.parse(pom_path).getroot()
    except (ET.ParseError, OSError) as e:
        logger.warning(f"Could not parse {pom_path}: {e}")
        return versions

    versions["project_version"] = _text(_child(root, "version")) or UNKNOWN
    properties = _child(root, "properties")
    if properties is not None:
        versions["selenium_version"] = _text(_child(properties, "selenium.version")) or UNKNOWN
        versions["testng_version"] = _text(_child(properties, "testng.version")) or UNKNOWN
    return versions


def read_readme_excerpt(readme_path: Path, limit: int = README_EXCERPT_CHARS) -> Optional[str]:
    if not readme_path.is_file():
        return None
    try:
        return readme_path.read_text(encoding="utf-8", errors="replace")[:limit]
    except OSError as e:
        logger.warning(f"Could not read {readme_path}: {e}")
        return None


def read_framework_info(project: ProjectConfig, catalog: TestCatalog) -> FrameworkInfo:
    """Combine POM versions, readme excerpt and the test count."""
    versions = read_pom_versions(project.pom_path)
    tests_root = project.root / "src" / "test"

    return FrameworkInfo(
        **versions,
        project_root=str(project.root),
        has_tests=tests_root.exists() or catalog.tests_dir.is_dir(),
        test_count=catalog.count() if catalog.tests_dir.is_dir() else 0,
        readme_excerpt=read_readme_excerpt(project.readme_path),
    )


def _child(parent: ET.Element, name: str) -> Optional[ET.Element]:
    """Direct child by local tag name; POMs are usually namespaced."""
    for element in parent:
        if element.tag.rsplit("}", 1)[-1] == name:
            return element
    return None


def _text(element: Optional[ET.Element]) -> Optional[str]:
    if element is None or element.text is None:
        return None
    return element.text.strip() or None
