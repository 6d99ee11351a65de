"""Tool-specific exceptions."""

from __future__ import annotations


class ToolError(Exception):
    """Base exception for tool operations."""

    code = "TOOL_ERROR"


class ToolNotFoundError(ToolError):
    """Tool name not recognized."""

    code = "UNKNOWN_TOOL"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolValidationError(ToolError):
    """Tool arguments failed validation."""

    code = "INVALID_PARAMS"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    code = "EXECUTION_ERROR"
