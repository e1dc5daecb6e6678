"""
Selenium MCP

Tool-calling bridge between a language model and a Maven/TestNG Selenium
test framework:
- List test classes and methods
- Run tests through Maven
- Read the last surefire results and render reports
- Describe the framework versions
"""

__version__ = "0.1.0"

from selenium_mcp.config import FrameworkConfig, get_config
from selenium_mcp.errors import (
    FrameworkError,
    ModelClientError,
    NotFoundError,
    ParseFailureError,
    UnknownToolError,
)
from selenium_mcp.executor import ToolExecutor
from selenium_mcp.orchestrator import SessionResult, ToolLoop
from selenium_mcp.registry import TOOLS, ToolRegistry
from selenium_mcp.transcript import Transcript

__all__ = [
    "__version__",
    "FrameworkConfig",
    "get_config",
    "FrameworkError",
    "ModelClientError",
    "NotFoundError",
    "ParseFailureError",
    "UnknownToolError",
    "ToolExecutor",
    "SessionResult",
    "ToolLoop",
    "TOOLS",
    "ToolRegistry",
    "Transcript",
]
