"""
Test framework collaborators.

Filesystem and process operations behind the tools: test discovery,
Maven runs, surefire result parsing, report rendering and project metadata.
"""

from selenium_mcp.framework.catalog import TestCatalog
from selenium_mcp.framework.maven import MavenRunner
from selenium_mcp.framework.metadata import read_framework_info
from selenium_mcp.framework.report import render_report
from selenium_mcp.framework.surefire import SurefireReader

__all__ = [
    "TestCatalog",
    "MavenRunner",
    "SurefireReader",
    "render_report",
    "read_framework_info",
]
