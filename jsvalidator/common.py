"""
Common utility functions for jsvalidator.
"""

import json
from typing import Any, Set

# Primitive type tags of the JSON data model
PRIMITIVE_TYPES = ('object', 'array', 'string', 'integer', 'number', 'boolean', 'null')


def is_number(value: Any) -> bool:
    """Check if a value is a JSON number (booleans are not numbers)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_array(value: Any) -> bool:
    """Check if a value is a JSON array."""
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    """Check if a value is a JSON object."""
    return isinstance(value, dict)


def type_tags_of(value: Any) -> Set[str]:
    """
    Returns the primitive type tags a value belongs to.

    A number without a fractional component is both an 'integer' and a
    'number'; every other value has exactly one tag.

    Parameters:
    value (any): The candidate value.

    Returns:
    set: The matching type tags, empty for values outside the JSON data model.
    """
    if value is None:
        return {'null'}
    if isinstance(value, bool):
        return {'boolean'}
    if isinstance(value, int):
        return {'integer', 'number'}
    if isinstance(value, float):
        if value.is_integer():
            return {'integer', 'number'}
        return {'number'}
    if isinstance(value, str):
        return {'string'}
    if is_array(value):
        return {'array'}
    if is_object(value):
        return {'object'}
    return set()


def json_equal(left: Any, right: Any) -> bool:
    """
    Structural equality following the JSON data model.

    Booleans never equal numbers, integral floats equal their integer
    counterparts, arrays compare element-wise and objects key-wise.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if is_array(left) and is_array(right):
        return len(left) == len(right) and all(json_equal(l, r) for l, r in zip(left, right))
    if is_object(left) and is_object(right):
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[k], right[k]) for k in left)
    if type(left) is not type(right):
        return False
    return left == right


def describe(value: Any) -> str:
    """Render a value for use in validation messages."""
    try:
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)


def format_number(number: Any) -> str:
    """Render a schema number, dropping the fraction of integral floats."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)
