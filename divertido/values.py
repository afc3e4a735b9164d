"""
Runtime values are plain Python objects:
Number is float, Boolean is bool, String is str and Nil is None.
"""
import math
from decimal import Decimal
from typing import Any


def is_number(value: Any) -> bool:
    # bool is not a float subclass, so true/false never pass as numbers.
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """Only nil and false are falsey."""
    if value is None: return False
    if isinstance(value, bool): return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Structural equality. Values of different kinds are never equal."""
    if type(a) is not type(b):
        return False
    return a == b


def stringify(value: Any) -> str:
    """Renders a value the way print shows it."""
    if value is None: return "nil"
    if isinstance(value, bool): return "true" if value else "false"
    if is_number(value):
        if math.isnan(value): return "NaN"
        if math.isinf(value): return "inf" if value > 0 else "-inf"
        # Shortest round-trip digits, written out in full without an exponent.
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return str(value)
