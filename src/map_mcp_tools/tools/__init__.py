"""Tool layer for map operations.

This module provides:
- MapToolDispatcher: Routes tool calls to implementations
- Success / Error: Uniform tool outcomes
- ToolCallResult: Outcome of a tool call from a model response
- Tool exceptions for error handling
- The tool catalog in Anthropic and OpenAI formats
"""

from __future__ import annotations

from map_mcp_tools.tools.definitions import InputSchema, Property, ToolDefinition
from map_mcp_tools.tools.dispatcher import MapToolDispatcher
from map_mcp_tools.tools.exceptions import (
    ToolError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolValidationError,
)
from map_mcp_tools.tools.result import Error, Success, ToolCallResult, ToolOutcome
from map_mcp_tools.tools.schemas import (
    TOOL_NAMES,
    get_all_tool_schemas,
    get_tools_for_llm,
)

__all__ = [
    "MapToolDispatcher",
    "Success",
    "Error",
    "ToolOutcome",
    "ToolCallResult",
    "ToolError",
    "ToolNotFoundError",
    "ToolValidationError",
    "ToolExecutionError",
    "InputSchema",
    "Property",
    "ToolDefinition",
    "TOOL_NAMES",
    "get_all_tool_schemas",
    "get_tools_for_llm",
]
