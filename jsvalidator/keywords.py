"""Validators for the individual JSON schema keywords.

Every validator is guarded by the kind of value it applies to: a keyword
that does not apply to a value (such as 'minLength' on a number) accepts it.
"""

# pylint: disable=too-many-arguments

import logging
import math
import operator
import re
from typing import Any, Callable, Dict, FrozenSet, List, Sequence

from jsvalidator.combinators import VALID, Validator, flatten
from jsvalidator.common import (PRIMITIVE_TYPES, describe, format_number, is_array, is_number, is_object,
                                json_equal, type_tags_of)
from jsvalidator.result import ValidationResult

logger = logging.getLogger(__name__)

# Tolerance for the quotient of 'multipleOf' on floating point values
MULTIPLE_OF_TOLERANCE = 1e-9

Comparator = Callable[[Any, Any], bool]


def validate_type(types: FrozenSet[str]) -> Validator:
    """Accepts values whose kind is one of the given type tags."""
    if not types:
        def validate_no_type(value: Any) -> ValidationResult:
            return ValidationResult.invalid(["Value is not permitted as 'type' names no known primitive type"])
        return validate_no_type

    expected = ", ".join(f"'{t}'" for t in PRIMITIVE_TYPES if t in types)

    def validate_type_tags(value: Any) -> ValidationResult:
        if type_tags_of(value) & types:
            return VALID
        return ValidationResult.invalid([f"{describe(value)} is not of type {expected}"])

    return validate_type_tags


def validate_enum(values: Sequence[Any]) -> Validator:
    """Accepts values structurally equal to one of the given literals."""
    values = list(values)

    def validate_enum_values(value: Any) -> ValidationResult:
        if any(json_equal(value, candidate) for candidate in values):
            return VALID
        return ValidationResult.invalid([f"{describe(value)} is not one of the permitted values {describe(values)}"])

    return validate_enum_values


def validate_length(comparator: Comparator, length: int, error: str) -> Validator:
    """Bounds the number of characters of string values."""
    def validate_string_length(value: Any) -> ValidationResult:
        if isinstance(value, str) and not comparator(len(value), length):
            return ValidationResult.invalid([error])
        return VALID

    return validate_string_length


def validate_pattern(pattern: str) -> Validator:
    """Accepts strings containing a match of the regular expression."""
    try:
        expression = re.compile(pattern)
    except re.error as e:
        logger.warning("Invalid regular expression '%s' in schema: %s", pattern, e)
        error = ValidationResult.invalid([f"Pattern '{pattern}' is not a valid regular expression"])

        def validate_bad_pattern(value: Any) -> ValidationResult:
            return error if isinstance(value, str) else VALID
        return validate_bad_pattern

    def validate_string_pattern(value: Any) -> ValidationResult:
        if isinstance(value, str) and not expression.search(value):
            return ValidationResult.invalid([f"'{value}' does not match pattern '{pattern}'"])
        return VALID

    return validate_string_pattern


def is_multiple_of(value: Any, multiple_of: Any) -> bool:
    """Check if value / multiple_of is integral, exactly for integers and within tolerance otherwise."""
    if isinstance(value, int) and isinstance(multiple_of, int):
        return value % multiple_of == 0
    try:
        quotient = value / multiple_of
    except OverflowError:
        return False
    if not math.isfinite(quotient):
        return False
    return math.isclose(quotient, round(quotient), rel_tol=MULTIPLE_OF_TOLERANCE, abs_tol=MULTIPLE_OF_TOLERANCE)


def validate_multiple_of(multiple_of: Any) -> Validator:
    """Accepts numbers that are a multiple of the divisor."""
    if multiple_of <= 0:
        error = ValidationResult.invalid([f"'multipleOf' must be greater than 0, got {format_number(multiple_of)}"])

        def validate_bad_divisor(value: Any) -> ValidationResult:
            return error if is_number(value) else VALID
        return validate_bad_divisor

    def validate_number_multiple_of(value: Any) -> ValidationResult:
        if is_number(value) and not is_multiple_of(value, multiple_of):
            return ValidationResult.invalid([f"{format_number(value)} is not a multiple of {format_number(multiple_of)}"])
        return VALID

    return validate_number_multiple_of


def validate_minimum(minimum: Any, exclusive: bool) -> Validator:
    """Lower bound on numbers, strict when exclusive."""
    if exclusive:
        comparator, error = operator.gt, f"Value is lower than or equal to exclusive minimum value of {format_number(minimum)}"
    else:
        comparator, error = operator.ge, f"Value is lower than minimum value of {format_number(minimum)}"
    return validate_numeric_bound(minimum, comparator, error)


def validate_maximum(maximum: Any, exclusive: bool) -> Validator:
    """Upper bound on numbers, strict when exclusive."""
    if exclusive:
        comparator, error = operator.lt, f"Value equals or exceeds exclusive maximum value of {format_number(maximum)}"
    else:
        comparator, error = operator.le, f"Value exceeds maximum value of {format_number(maximum)}"
    return validate_numeric_bound(maximum, comparator, error)


def validate_numeric_bound(bound: Any, comparator: Comparator, error: str) -> Validator:
    def validate_number_bound(value: Any) -> ValidationResult:
        if is_number(value) and not comparator(value, bound):
            return ValidationResult.invalid([error])
        return VALID

    return validate_number_bound


def validate_array_length(length: int, comparator: Comparator, error: str) -> Validator:
    """Bounds the number of elements of arrays."""
    def validate_array_items_length(value: Any) -> ValidationResult:
        if is_array(value) and not comparator(len(value), length):
            return ValidationResult.invalid([error])
        return VALID

    return validate_array_items_length


def validate_unique_items(value: Any) -> ValidationResult:
    """Accepts arrays in which no two elements are structurally equal."""
    if not is_array(value):
        return VALID
    for i, item in enumerate(value):
        for other in value[i + 1:]:
            if json_equal(item, other):
                return ValidationResult.invalid([f"Items of array must be unique, {describe(item)} appears more than once"])
    return VALID


def validate_items(item_validator: Validator) -> Validator:
    """Validates every element of an array against the same validator."""
    def validate_array_items(value: Any) -> ValidationResult:
        if is_array(value):
            return flatten(item_validator(item) for item in value)
        return VALID

    return validate_array_items


def validate_tuple_items(item_validators: Sequence[Validator], additional_items: Validator) -> Validator:
    """Validates array elements positionally; elements past the list go to additional_items."""
    item_validators = list(item_validators)

    def validate_array_tuple(value: Any) -> ValidationResult:
        if not is_array(value):
            return VALID
        results: List[ValidationResult] = []
        for index, element in enumerate(value):
            if index >= len(item_validators):
                results.append(additional_items(element))
            else:
                results.append(item_validators[index](element))
        return flatten(results)

    return validate_array_tuple


def validate_properties_length(length: int, comparator: Comparator, error: str) -> Validator:
    """Bounds the number of keys of objects."""
    def validate_object_length(value: Any) -> ValidationResult:
        if is_object(value) and not comparator(len(value), length):
            return ValidationResult.invalid([error])
        return VALID

    return validate_object_length


def validate_required(required: Sequence[str]) -> Validator:
    """Accepts objects holding every named key."""
    required = list(required)

    def validate_required_keys(value: Any) -> ValidationResult:
        if not is_object(value):
            return VALID
        missing = [key for key in required if key not in value]
        if missing:
            return ValidationResult.invalid([f"Required property '{key}' is missing" for key in missing])
        return VALID

    return validate_required_keys


def validate_properties(properties: Dict[str, Validator],
                        pattern_properties: Dict[str, Validator],
                        additional_properties: Validator) -> Validator:
    """
    Validates the members of an object.

    A key named in properties is validated against its validator; a key
    matching one or more patternProperties expressions is validated against
    each of them; a key matched by neither is validated against
    additional_properties.
    """
    patterns = []
    pattern_errors: List[str] = []
    for pattern, validator in pattern_properties.items():
        try:
            patterns.append((re.compile(pattern), validator))
        except re.error as e:
            logger.warning("Invalid patternProperties expression '%s' in schema: %s", pattern, e)
            pattern_errors.append(f"Pattern '{pattern}' of 'patternProperties' is not a valid regular expression")

    def validate_object_properties(value: Any) -> ValidationResult:
        if not is_object(value):
            return VALID
        results: List[ValidationResult] = []
        if pattern_errors:
            results.append(ValidationResult.invalid(pattern_errors))
        for key, member in value.items():
            matched = False
            if key in properties:
                matched = True
                results.append(properties[key](member))
            for expression, validator in patterns:
                if expression.search(key):
                    matched = True
                    results.append(validator(member))
            if not matched:
                result = additional_properties(member)
                if not result.is_valid:
                    results.append(ValidationResult.invalid([f"Property '{key}': {error}" for error in result.errors]))
        return flatten(results)

    return validate_object_properties


def validate_dependency(key: str, validator: Validator) -> Validator:
    """Applies a schema dependency to the whole object when key is present."""
    def validate_schema_dependency(value: Any) -> ValidationResult:
        if is_object(value) and key in value:
            return validator(value)
        return VALID

    return validate_schema_dependency


def validate_dependencies(key: str, dependencies: Sequence[str]) -> Validator:
    """Requires every dependency key to be present when key is present."""
    dependencies = list(dependencies)

    def validate_property_dependencies(value: Any) -> ValidationResult:
        if is_object(value) and key in value:
            return flatten(
                ValidationResult.invalid([f"'{key}' is missing its dependency of '{dependency}'"])
                for dependency in dependencies if dependency not in value
            )
        return VALID

    return validate_property_dependencies
