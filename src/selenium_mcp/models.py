"""
Data models for tool inputs and results.

Pydantic models for validating tool arguments and for the structured
payloads returned to the model.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Tool Inputs
# =============================================================================

class ToolInput(BaseModel):
    """Base for tool argument models; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")


class ListTestsInput(ToolInput):
    test_class: Optional[str] = Field(default=None, description="Only list this test class")

    @field_validator("test_class")
    @classmethod
    def _blank_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class RunTestsInput(ToolInput):
    test_name: Optional[str] = Field(default=None, description="Test selector, e.g. HomePageTest#testTitle")
    verbose: bool = Field(default=False, description="Keep Maven's full output")

    @field_validator("test_name")
    @classmethod
    def _validate_selector(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if any(ch.isspace() for ch in value):
            raise ValueError("test selector must not contain whitespace")
        return value


class ReportFormat(str, Enum):
    """Report renderings."""
    SUMMARY = "summary"
    STRUCTURED = "structured"
    MARKUP = "markup"


# Names the model may still use for the structured and markup renderings
REPORT_FORMAT_ALIASES = {
    "json": ReportFormat.STRUCTURED,
    "html": ReportFormat.MARKUP,
}


class GenerateReportInput(ToolInput):
    output_format: ReportFormat = Field(default=ReportFormat.SUMMARY)

    @field_validator("output_format", mode="before")
    @classmethod
    def _resolve_alias(cls, value: Any) -> Any:
        if value is None or value == "":
            return ReportFormat.SUMMARY
        if isinstance(value, str):
            return REPORT_FORMAT_ALIASES.get(value.lower(), value.lower())
        return value


class EmptyInput(ToolInput):
    """Input for tools that take no arguments."""


# =============================================================================
# Tool Results
# =============================================================================

class TestRunResult(BaseModel):
    """Outcome of a Maven test run. A non-zero exit is data, not an error."""

    __test__ = False

    success: bool = Field(..., description="True when Maven exited with code 0")
    exit_code: Optional[int] = Field(default=None, description="Process exit code")
    output: str = Field(default="", description="Tail of stdout")
    error: str = Field(default="", description="Tail of stderr")
    command: str = Field(default="", description="Command line that was executed")
    timed_out: bool = Field(default=False, description="True if the run was killed on timeout")


class TestResults(BaseModel):
    """Counts parsed from the last surefire result file."""

    __test__ = False

    total_tests: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    errors: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0)
    time_seconds: float = Field(default=0.0, ge=0)
    report_file: Optional[str] = Field(default=None, description="File the counts were read from")

    @property
    def passed(self) -> int:
        return max(0, self.total_tests - (self.failures + self.errors))

    @property
    def success_rate(self) -> float:
        """Percentage of passed tests; 0.0 when nothing ran."""
        if self.total_tests <= 0:
            return 0.0
        return self.passed / self.total_tests * 100

    def to_payload(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"report_file"})
        data["passed"] = self.passed
        if self.report_file:
            data["report_file"] = self.report_file
        return data


class FrameworkInfo(BaseModel):
    """Static project metadata combined with the test count."""

    project_version: str = "unknown"
    selenium_version: str = "unknown"
    testng_version: str = "unknown"
    project_root: str = ""
    has_tests: bool = False
    test_count: int = 0
    readme_excerpt: Optional[str] = None
