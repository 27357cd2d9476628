"""
Tool adapter for twd-mcp.

Exposes the generators as named tools: argument validation, dispatch and
result wrapping, plus the stdio server built on the MCP SDK.
"""

from .models import (
    ElementInput,
    NetworkRequestInput,
    InteractionInput,
    SuggestSelectorsInput,
    GenerateMocksInput,
    GenerateTestInput,
    ToolDefinition,
    ToolResult,
)
from .tools import list_tools, call_tool, validate_arguments

__all__ = [
    "ElementInput",
    "NetworkRequestInput",
    "InteractionInput",
    "SuggestSelectorsInput",
    "GenerateMocksInput",
    "GenerateTestInput",
    "ToolDefinition",
    "ToolResult",
    "list_tools",
    "call_tool",
    "validate_arguments",
]
