"""Validators and the combinators that assemble them.

A validator is any callable taking a candidate value and returning a
ValidationResult.
"""

from typing import Any, Callable, Iterable, List, Sequence

from jsvalidator.result import ValidationResult

Validator = Callable[[Any], ValidationResult]

VALID = ValidationResult.valid()


def valid(value: Any) -> ValidationResult:
    """The validator that accepts every value."""
    return VALID


def invalid(message: str) -> Validator:
    """Creates a validator that rejects every value with the given message."""
    result = ValidationResult.invalid([message])

    def validate_invalid(value: Any) -> ValidationResult:
        return result

    return validate_invalid


def flatten(results: Iterable[ValidationResult]) -> ValidationResult:
    """
    Reduces results into one.

    Valid members contribute nothing; the messages of the invalid members are
    concatenated in order.
    """
    errors: List[str] = []
    for result in results:
        if not result.is_valid:
            errors.extend(result.errors)
    if errors:
        return ValidationResult.invalid(errors)
    return VALID


def all_of(validators: Sequence[Validator]) -> Validator:
    """Accepts a value only if every validator accepts it, reporting every failure."""
    validators = list(validators)

    def validate_all_of(value: Any) -> ValidationResult:
        return flatten(validator(value) for validator in validators)

    return validate_all_of


def any_of(validators: Sequence[Validator]) -> Validator:
    """Accepts a value if at least one validator accepts it."""
    validators = list(validators)

    def validate_any_of(value: Any) -> ValidationResult:
        errors: List[str] = []
        for validator in validators:
            result = validator(value)
            if result.is_valid:
                return result
            errors.extend(result.errors)
        return ValidationResult.invalid(errors or ["Value does not match any of the 'anyOf' schemas"])

    return validate_any_of


def one_of(validators: Sequence[Validator]) -> Validator:
    """Accepts a value if exactly one validator accepts it."""
    validators = list(validators)

    def validate_one_of(value: Any) -> ValidationResult:
        results = [validator(value) for validator in validators]
        matched = sum(1 for result in results if result.is_valid)
        if matched == 1:
            return VALID
        if matched == 0:
            errors = ["Value does not match any of the 'oneOf' schemas"]
            for result in results:
                errors.extend(result.errors)
            return ValidationResult.invalid(errors)
        return ValidationResult.invalid([f"Value matches more than one of the 'oneOf' schemas ({matched} matched)"])

    return validate_one_of


def not_(validator: Validator) -> Validator:
    """Accepts a value only if the inner validator rejects it."""
    rejected = ValidationResult.invalid(["Value must not match the 'not' schema"])

    def validate_not(value: Any) -> ValidationResult:
        if validator(value).is_valid:
            return rejected
        return VALID

    return validate_not
