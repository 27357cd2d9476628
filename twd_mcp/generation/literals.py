"""
Rendering of JSON-like values as JavaScript literal source.

Output matches ``JSON.stringify(value, null, indent)`` for JSON-compatible
input, so captured response bodies can be pasted into generated tests.
"""

import json
import math
from decimal import Decimal
from typing import Any

from ..core.exceptions import GenerationError


def render_literal(value: Any, indent: int = 2) -> str:
    """Render a JSON-like value as pretty-printed literal source.

    Args:
        value: None, bool, int, float, str, list/tuple or dict (nested freely)
        indent: Spaces per nesting level

    Returns:
        Literal source text

    Raises:
        GenerationError: If the value contains an unsupported type
    """
    return _render(value, indent, 0)


def _render(value: Any, indent: int, depth: int) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, str):
        return render_string(value)
    if isinstance(value, (list, tuple)):
        return _render_sequence(value, indent, depth)
    if isinstance(value, dict):
        return _render_mapping(value, indent, depth)

    raise GenerationError(
        f"Cannot render value of type {type(value).__name__} as a literal",
        operation="render_literal",
        value_type=type(value).__name__,
    )


def render_string(text: str) -> str:
    """Double-quoted string literal with JSON escaping."""
    return json.dumps(text, ensure_ascii=False)


def _render_float(value: float) -> str:
    if not math.isfinite(value):
        return "null"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    # repr gives the shortest round-tripping digits; lay them out the way
    # JavaScript's Number#toString does.
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    point = exponent + len(digits)
    sign = "-" if value < 0 else ""

    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    power = point - 1
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def _render_sequence(items, indent: int, depth: int) -> str:
    if not items:
        return "[]"

    inner = " " * (indent * (depth + 1))
    outer = " " * (indent * depth)
    rendered = [inner + _render(item, indent, depth + 1) for item in items]
    return "[\n" + ",\n".join(rendered) + "\n" + outer + "]"


def _render_mapping(mapping: dict, indent: int, depth: int) -> str:
    if not mapping:
        return "{}"

    inner = " " * (indent * (depth + 1))
    outer = " " * (indent * depth)
    rendered = [
        f"{inner}{render_string(str(key))}: {_render(item, indent, depth + 1)}"
        for key, item in mapping.items()
    ]
    return "{\n" + ",\n".join(rendered) + "\n" + outer + "}"
