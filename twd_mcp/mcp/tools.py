"""
Tool registry and dispatch for the twd-mcp server.

Validates raw tool arguments against the pydantic input models, runs the
matching generator and wraps its text output, or the failure message, in a
ToolResult. The generators only ever see validated records.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

import pydantic
from pydantic import BaseModel

from ..core.exceptions import UnknownToolError, ValidationError
from ..core.logging_config import log_performance
from ..generation.mocks import MockSynthesizer
from ..generation.recording import RecordingAssembler
from ..generation.selectors import SelectorRanker
from .models import (
    GenerateMocksInput,
    GenerateTestInput,
    SuggestSelectorsInput,
    ToolDefinition,
    ToolResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Tool:
    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[[Any], str]


def _suggest_selectors(arguments: SuggestSelectorsInput) -> str:
    suggestions = SelectorRanker().rank(arguments.to_descriptor())
    return json.dumps([s.to_dict() for s in suggestions], indent=2, ensure_ascii=False)


def _generate_mocks(arguments: GenerateMocksInput) -> str:
    return MockSynthesizer().synthesize(arguments.to_exchanges())


def _generate_test(arguments: GenerateTestInput) -> str:
    return RecordingAssembler().assemble(
        arguments.to_interactions(),
        arguments.to_exchanges(),
        arguments.test_name,
    )


_TOOLS: Dict[str, _Tool] = {
    tool.name: tool
    for tool in [
        _Tool(
            name="suggestSelectors",
            description=(
                "Suggest testing-library selectors for a DOM element. Prioritizes "
                "accessible selectors (role > label > text > placeholder > testid)."
            ),
            input_model=SuggestSelectorsInput,
            handler=_suggest_selectors,
        ),
        _Tool(
            name="generateMocksFromNetwork",
            description=(
                "Generate TWD mock request handlers from captured network "
                "requests/responses."
            ),
            input_model=GenerateMocksInput,
            handler=_generate_mocks,
        ),
        _Tool(
            name="generateTestFromRecording",
            description=(
                "Generate a complete TWD test file from browser recording data "
                "(interactions and optional network calls)."
            ),
            input_model=GenerateTestInput,
            handler=_generate_test,
        ),
    ]
}


def list_tools() -> List[ToolDefinition]:
    """Definitions of all registered tools, in registration order."""
    return [
        ToolDefinition(
            name=tool.name,
            description=tool.description,
            input_schema=tool.input_model.model_json_schema(by_alias=True),
        )
        for tool in _TOOLS.values()
    ]


def validate_arguments(name: str, arguments: Optional[Dict[str, Any]]) -> BaseModel:
    """Validate raw arguments for a tool.

    Raises:
        UnknownToolError: If no tool has this name
        ValidationError: If the arguments do not match the tool's schema
    """
    tool = _TOOLS.get(name)
    if tool is None:
        raise UnknownToolError(name)

    try:
        return tool.input_model.model_validate(arguments or {})
    except pydantic.ValidationError as e:
        violations = [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in e.errors()
        ]
        raise ValidationError(
            f"Invalid arguments for {name}: " + "; ".join(violations),
            validation_type="tool_arguments",
            violations=violations,
        )


@log_performance("tool call")
def dispatch(name: str, arguments: Optional[Dict[str, Any]]) -> str:
    """Validate arguments and run a tool, raising on any failure."""
    validated = validate_arguments(name, arguments)
    return _TOOLS[name].handler(validated)


def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """Run a tool and wrap its output, turning failures into error results.

    Args:
        name: Registered tool name
        arguments: Raw argument bundle from the caller

    Returns:
        ToolResult with the generated text, or an error-flagged message
    """
    try:
        text = dispatch(name, arguments)
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.error(
            f"Tool call {name} failed: {message}",
            extra={"metadata": e.to_dict() if hasattr(e, "to_dict") else {"error": message}},
        )
        return ToolResult(text=f"Error: {message}", is_error=True)

    return ToolResult(text=text)
