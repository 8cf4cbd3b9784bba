"""Reduce packed dimensions to a bit width.

Only the simplest form of packed range is supported: a single
``[msb:0]`` dimension whose bounds are plain integer literals.
Anything else (parameters, arithmetic, a non-zero lower bound, several
packed dimensions) raises :class:`svinst.errors.UnsupportedRange`.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional

from .errors import UnsupportedRange
from .syntax import kind_name, node_text, token_text

# Unsized decimal literal, with the underscores SystemVerilog allows.
_DECIMAL = re.compile(r"^[0-9][0-9_]*$")


def literal_value(expr: Any) -> Optional[int]:
    """Return the value of an unsized decimal literal expression, else ``None``."""
    if kind_name(expr) != "IntegerLiteralExpression":
        return None
    text = token_text(getattr(expr, "literal", None))
    if not _DECIMAL.match(text):
        return None
    return int(text.replace("_", ""))


def evaluate(
    dimensions: Optional[Iterable[Any]],
    module_name: Optional[str] = None,
    port_name: Optional[str] = None,
) -> int:
    """Compute the width of a list of packed dimensions.

    Args:
        dimensions: ``VariableDimension`` nodes as found on a data type,
            or ``None``/empty for a scalar.
        module_name: Owning module, used in error messages.
        port_name: Owning port, used in error messages.

    Returns:
        ``msb + 1`` for ``[msb:0]``, or 1 when there is no dimension.

    Raises:
        UnsupportedRange: If the dimensions have any other form.
    """
    dims: List[Any] = [d for d in (dimensions or []) if kind_name(d) == "VariableDimension"]
    if not dims:
        return 1

    def fail(reason: str) -> UnsupportedRange:
        text = " ".join(node_text(d) for d in dims)
        return UnsupportedRange(
            f"unsupported packed dimension {text}: {reason}",
            module_name=module_name,
            port_name=port_name,
        )

    if len(dims) > 1:
        raise fail("only a single packed dimension is supported")

    specifier = getattr(dims[0], "specifier", None)
    selector = getattr(specifier, "selector", None)
    if kind_name(specifier) != "RangeDimensionSpecifier" or kind_name(selector) != "SimpleRangeSelect":
        raise fail("expected a [msb:lsb] range")

    msb = literal_value(getattr(selector, "left", None))
    lsb = literal_value(getattr(selector, "right", None))
    if msb is None or lsb is None:
        raise fail("bounds must be integer literals")
    if lsb != 0:
        raise fail("lower bound must be 0")
    return msb + 1
