"""
Type-aware value comparison.

Values are classified into a small closed set of kinds, and each kind has
its own inequality rule: fuzzy equality for floating point and decimals,
element-wise equality for byte sequences, plain equality otherwise.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """Shapes of column values that need a dedicated comparison rule."""

    NULL = "null"
    FLOAT = "float"
    DECIMAL = "decimal"
    BYTES = "bytes"
    OTHER = "other"


def value_kind(value: Any) -> ValueKind:
    """Classify a column value."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, Decimal):
        return ValueKind.DECIMAL
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValueKind.BYTES
    return ValueKind.OTHER


def fuzzy_equals(left: float, right: float, tolerance: float) -> bool:
    """
    Equality up to an absolute tolerance (inclusive).

    Identical values are equal even when infinite, and NaN equals NaN.
    """
    if left == right:
        return True
    if math.isnan(left) and math.isnan(right):
        return True
    return abs(left - right) <= tolerance


def decimal_differs(left: Decimal, right: Decimal, tolerance: float) -> bool:
    # str() keeps the tolerance as written, e.g. 0.3 rather than 0.29999...
    return abs(left - right) > Decimal(str(tolerance))


def bytes_differ(left, right) -> bool:
    return bytes(left) != bytes(right)


def values_differ(left: Any, right: Any, floating_point_tolerance: float) -> bool:
    """
    Decide whether two column values differ.

    Args:
        left: Source value (None for null)
        right: Target value (None for null)
        floating_point_tolerance: Absolute tolerance for float and decimal values

    Returns:
        True if the values are considered different
    """
    match (value_kind(left), value_kind(right)):
        case (ValueKind.NULL, ValueKind.NULL):
            return False
        case (ValueKind.NULL, _) | (_, ValueKind.NULL):
            return True
        case (ValueKind.FLOAT, ValueKind.FLOAT):
            return not fuzzy_equals(left, right, floating_point_tolerance)
        case (ValueKind.DECIMAL, ValueKind.DECIMAL):
            return decimal_differs(left, right, floating_point_tolerance)
        case (ValueKind.BYTES, ValueKind.BYTES):
            return bytes_differ(left, right)
        case _:
            return left != right
