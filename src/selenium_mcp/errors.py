"""
Error types for the Selenium MCP bridge.

Tool-level errors (FrameworkError and subclasses) are recoverable: the
executor serializes them into a payload the model can read. Loop-level
errors (ModelClientError, TranscriptError, RegistryMismatchError) end the
session and are surfaced to the operator.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Kinds of recoverable tool errors."""
    NOT_FOUND = "not_found"
    PARSE_FAILURE = "parse_failure"
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENTS = "invalid_arguments"


class FrameworkError(Exception):
    """Base class for errors reported back to the model as data."""

    kind: ErrorKind = ErrorKind.NOT_FOUND

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        """Structured error payload for a tool result."""
        payload: Dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        payload.update(self.details)
        return payload


class NotFoundError(FrameworkError):
    """An expected file or directory does not exist."""
    kind = ErrorKind.NOT_FOUND


class ParseFailureError(FrameworkError):
    """A result file exists but could not be parsed."""
    kind = ErrorKind.PARSE_FAILURE


class UnknownToolError(FrameworkError):
    """The model asked for a tool that is not registered."""
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"tool": name})
        self.name = name


class InvalidArgumentsError(FrameworkError):
    """Tool arguments failed validation."""
    kind = ErrorKind.INVALID_ARGUMENTS


class ModelClientError(Exception):
    """The model could not be reached or returned an unusable response."""


class TranscriptError(Exception):
    """A turn was appended out of phase or did not answer its requests."""


class RegistryMismatchError(Exception):
    """Declared tools and executor handlers are out of lock-step."""
