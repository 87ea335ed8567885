"""Value coercion helpers shared by the evaluator and the validator.

Form data arrives as loosely typed JSON-like values, so comparisons need a
consistent notion of "number", "string", "equal" and "empty".
"""

import io
import math
from collections.abc import Mapping
from typing import Any, Iterable


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """Type-strict equality.

    Booleans never equal numbers and strings never equal numbers, while
    ints and floats compare by value.

    Examples:
        >>> strict_equals(5, 5.0)
        True
        >>> strict_equals('5', 5)
        False
        >>> strict_equals(True, 1)
        False
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) or is_number(right):
        return is_number(left) and is_number(right) and left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    return left == right


def strict_contains(items: Iterable[Any], target: Any) -> bool:
    """Membership test using strict_equals."""
    return any(strict_equals(item, target) for item in items)


def to_number(value: Any) -> float:
    """Coerce a value to a float, returning NaN when it has no numeric reading.

    Args:
        value: Any form value

    Returns:
        1.0/0.0 for booleans, the value for numbers, the parsed value for
        numeric strings (blank strings read as 0), NaN for everything else
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if '_' in text:
            return math.nan
        if any(word in text.lower() for word in ('inf', 'nan')):
            # Only the spelled-out Infinity is numeric
            return float(text) if text in ('Infinity', '+Infinity', '-Infinity') else math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def to_string(value: Any) -> str:
    """Render a value the way it appears in a text input."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join('' if item is None else to_string(item) for item in value)
    return str(value)


def is_falsy(value: Any) -> bool:
    """None, False, 0, NaN and the empty string are falsy.

    Empty lists and mappings are NOT falsy here: they are present values.
    """
    if value is None or value is False:
        return True
    if is_number(value):
        return value == 0 or math.isnan(value)
    if isinstance(value, str):
        return value == ''
    return False


def is_file_like(value: Any) -> bool:
    """True for uploaded-file handles, open files and binary buffers."""
    if isinstance(value, (bytes, bytearray, memoryview, io.IOBase)):
        return True
    if isinstance(value, Mapping):
        return False
    return hasattr(value, 'name') and hasattr(value, 'size')


def is_empty_value(value: Any) -> bool:
    """None, '', an empty list/tuple or an empty mapping.

    Zero and False are values, not emptiness.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    if isinstance(value, Mapping):
        return len(value) == 0
    return False
