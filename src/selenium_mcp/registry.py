"""
Tool declarations for the Selenium test framework.

Declarations are static MCP ``Tool`` objects. They are sent verbatim to the
model on every request and must stay in lock-step with the executor's
handlers.
"""

from typing import Any, Dict, Iterable, List, Optional

from mcp.types import Tool

from selenium_mcp.errors import RegistryMismatchError


# =============================================================================
# Tool Definitions
# =============================================================================

TOOLS: List[Tool] = [
    Tool(
        name="list_tests",
        description="List all available Selenium tests in the framework, grouped by test class.",
        inputSchema={
            "type": "object",
            "properties": {
                "test_class": {
                    "type": "string",
                    "description": "Optional: specific test class to filter (HomePageTest, AboutPageTest, etc.)",
                },
            },
            "required": [],
        },
    ),
    Tool(
        name="run_tests",
        description="Run Selenium tests using Maven. Returns the exit code, a success flag and the tail of the build output.",
        inputSchema={
            "type": "object",
            "properties": {
                "test_name": {
                    "type": "string",
                    "description": "Optional: specific test to run (e.g., 'HomePageTest' or 'HomePageTest#testHomePageLoadsSuccessfully')",
                },
                "verbose": {
                    "type": "boolean",
                    "description": "Show verbose output (default: false)",
                    "default": False,
                },
            },
            "required": [],
        },
    ),
    Tool(
        name="get_test_results",
        description="Get results from the last test run: total, passed, failures, errors, skipped and execution time.",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
    Tool(
        name="generate_report",
        description="Generate a test report from the last test run as a text summary, a structured document or HTML markup.",
        inputSchema={
            "type": "object",
            "properties": {
                "output_format": {
                    "type": "string",
                    "enum": ["summary", "structured", "markup"],
                    "description": "Format for the report (default: summary)",
                    "default": "summary",
                },
            },
            "required": [],
        },
    ),
    Tool(
        name="get_framework_info",
        description="Get information about the Selenium test framework: project, Selenium and TestNG versions and the number of tests.",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
]


class ToolRegistry:
    """Static set of tool declarations."""

    def __init__(self, tools: Optional[Iterable[Tool]] = None):
        tools = list(TOOLS if tools is None else tools)
        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise RegistryMismatchError(f"Duplicate tool declaration: {tool.name}")
            self._tools[tool.name] = tool

    def declarations(self) -> List[Tool]:
        """All declarations, in registration order."""
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools)

    def is_known(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def verify(self, handler_names: Iterable[str]) -> None:
        """
        Check declarations and handlers are in lock-step.

        Raises:
            RegistryMismatchError: If a declared tool has no handler or a
                handler has no declaration
        """
        handlers = set(handler_names)
        declared = set(self._tools)

        missing = sorted(declared - handlers)
        undeclared = sorted(handlers - declared)
        if missing or undeclared:
            parts = []
            if missing:
                parts.append(f"no handler for {', '.join(missing)}")
            if undeclared:
                parts.append(f"no declaration for {', '.join(undeclared)}")
            raise RegistryMismatchError("Tool registry mismatch: " + "; ".join(parts))

    def to_anthropic(self) -> List[Dict[str, Any]]:
        """Declarations in the Messages API tool format."""
        return [
            {
                "name": tool.name,
                "description": tool.description or "",
                "input_schema": tool.inputSchema,
            }
            for tool in self._tools.values()
        ]
