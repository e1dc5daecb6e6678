"""
Tool execution for the Selenium test framework.

Dispatches a tool call by name to its handler and serializes the outcome as
a JSON payload. Tool-level errors become structured error payloads so the
model can recover; they never escape ``execute``.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from selenium_mcp.config import FrameworkConfig
from selenium_mcp.errors import FrameworkError, InvalidArgumentsError, UnknownToolError
from selenium_mcp.framework import MavenRunner, SurefireReader, TestCatalog, read_framework_info, render_report
from selenium_mcp.models import (
    EmptyInput,
    GenerateReportInput,
    ListTestsInput,
    RunTestsInput,
    ToolInput,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Dict[str, Any]]]


class ToolOutcome:
    """Serialized payload of one tool execution."""

    def __init__(self, payload: str, is_error: bool = False):
        self.payload = payload
        self.is_error = is_error

    def __repr__(self) -> str:
        return f"ToolOutcome(is_error={self.is_error}, payload={self.payload[:80]!r})"


class ToolExecutor:
    """Runs the framework operations behind the declared tools."""

    def __init__(
        self,
        config: FrameworkConfig,
        catalog: Optional[TestCatalog] = None,
        runner: Optional[MavenRunner] = None,
        reader: Optional[SurefireReader] = None,
    ):
        self.config = config
        project = config.project
        self.catalog = catalog or TestCatalog(project.tests_path)
        self.runner = runner or MavenRunner(project.root, config.maven)
        self.reader = reader or SurefireReader(project.reports_path, project.results_file)

        self._handlers: Dict[str, Tuple[Type[ToolInput], Handler]] = {
            "list_tests": (ListTestsInput, self.handle_list_tests),
            "run_tests": (RunTestsInput, self.handle_run_tests),
            "get_test_results": (EmptyInput, self.handle_get_test_results),
            "generate_report": (GenerateReportInput, self.handle_generate_report),
            "get_framework_info": (EmptyInput, self.handle_get_framework_info),
        }

    @property
    def handler_names(self) -> List[str]:
        return list(self._handlers)

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolOutcome:
        """
        Execute a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments from the model

        Returns:
            ToolOutcome with a JSON payload (an error payload on failure)

        Raises:
            OSError: If the build tool cannot be spawned
        """
        try:
            entry = self._handlers.get(name)
            if entry is None:
                raise UnknownToolError(name)

            input_model, handler = entry
            try:
                params = input_model.model_validate(arguments or {})
            except ValidationError as e:
                problems = "; ".join(
                    f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
                    for err in e.errors()
                )
                raise InvalidArgumentsError(
                    f"Invalid arguments for {name}: {problems}",
                    {"tool": name},
                ) from e

            result = await handler(params)
            return ToolOutcome(_dump(result))
        except FrameworkError as e:
            logger.warning(f"Tool {name} reported {e.kind.value}: {e.message}")
            return ToolOutcome(_dump(e.to_payload()), is_error=True)

    # =========================================================================
    # Tool Handlers
    # =========================================================================

    async def handle_list_tests(self, params: ListTestsInput) -> Dict[str, Any]:
        """Handle list_tests tool call."""
        return self.catalog.list_tests(params.test_class)

    async def handle_run_tests(self, params: RunTestsInput) -> Dict[str, Any]:
        """Handle run_tests tool call."""
        result = await self.runner.run_tests(params.test_name, params.verbose)
        return result.model_dump()

    async def handle_get_test_results(self, params: EmptyInput) -> Dict[str, Any]:
        """Handle get_test_results tool call."""
        return self.reader.read_results().to_payload()

    async def handle_generate_report(self, params: GenerateReportInput) -> Dict[str, Any]:
        """Handle generate_report tool call."""
        results = self.reader.read_results()
        return {
            "format": params.output_format.value,
            "report": render_report(results, params.output_format),
        }

    async def handle_get_framework_info(self, params: EmptyInput) -> Dict[str, Any]:
        """Handle get_framework_info tool call."""
        info = read_framework_info(self.config.project, self.catalog)
        return info.model_dump(exclude_none=True)


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, default=str)
