"""Shared fixtures: a throwaway Maven project and a scripted model client."""

import stat
from pathlib import Path
from typing import Any, Dict, List

import pytest

from selenium_mcp.config import FrameworkConfig, MavenConfig, ModelConfig, ProjectConfig
from selenium_mcp.model_client import ModelResponse


HOME_PAGE_TEST = """
package com.selenium.tests.ui.prism;

public class HomePageTest extends BaseTest {

    @Test
    public void testHomePageLoadsSuccessfully() {
    }

    @Test
    public void testHomePageMainHeading() {
    }

    private void helper() {
    }
}
"""

ABOUT_PAGE_TEST = """
public class AboutPageTest extends BaseTest {
    @Test(description = "about page")
    public void testAboutPageTitle() {
    }
}
"""

POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <groupId>com.selenium</groupId>
    <artifactId>selenium-framework</artifactId>
    <version>1.2.0</version>
    <properties>
        <selenium.version>4.15.0</selenium.version>
    </properties>
</project>
"""

SUITE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="TestSuite" time="12.5" tests="10" errors="1" skipped="0" failures="2">
  <testcase name="testHomePageLoadsSuccessfully" classname="HomePageTest" time="1.0"/>
</testsuite>
"""

FAKE_MVN = """#!/bin/sh
echo "mvn $@"
echo "stderr line" >&2
exit "${FAKE_MVN_EXIT:-0}"
"""


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A Maven project with two test classes, a POM and a README."""
    tests_dir = tmp_path / "src/test/java/com/selenium/tests/ui/prism"
    tests_dir.mkdir(parents=True)
    (tests_dir / "HomePageTest.java").write_text(HOME_PAGE_TEST)
    (tests_dir / "AboutPageTest.java").write_text(ABOUT_PAGE_TEST)
    (tmp_path / "pom.xml").write_text(POM)
    (tmp_path / "README.md").write_text("# Selenium Framework\n" + "x" * 1000)
    return tmp_path


@pytest.fixture
def fake_mvn(tmp_path: Path) -> Path:
    """Shell script standing in for mvn; exits with $FAKE_MVN_EXIT."""
    script = tmp_path / "bin" / "mvn"
    script.parent.mkdir()
    script.write_text(FAKE_MVN)
    script.chmod(script.stat().st_mode | stat.S_IEXEC)
    return script


@pytest.fixture
def config(project_root: Path, fake_mvn: Path) -> FrameworkConfig:
    return FrameworkConfig(
        model=ModelConfig(api_key="test-key"),
        maven=MavenConfig(executable=str(fake_mvn), timeout=30),
        project=ProjectConfig(project_root=project_root),
    )


def write_results(project_root: Path, content: str = SUITE_XML, name: str = "TEST-TestSuite.xml") -> Path:
    reports = project_root / "target/surefire-reports"
    reports.mkdir(parents=True, exist_ok=True)
    path = reports / name
    path.write_text(content)
    return path


class ScriptedModelClient:
    """ModelClient that replays canned responses and records requests."""

    def __init__(self, responses: List[ModelResponse]):
        self.responses = list(responses)
        self.requests: List[Dict[str, Any]] = []

    async def create(self, messages, tools, max_tokens) -> ModelResponse:
        self.requests.append({"messages": messages, "tools": tools, "max_tokens": max_tokens})
        if not self.responses:
            raise AssertionError("model called more often than scripted")
        return self.responses.pop(0)
