"""Validation outcome type shared by every validator.

A result is either valid, or invalid with an ordered, non-empty list of
human-readable messages.
"""

from typing import Iterable, List, Optional


class SchemaValidationError(Exception):
    """Exception raised when a value does not conform to a JSON schema."""

    def __init__(self, errors: List[str], instance_path: Optional[str] = None):
        self.errors = list(errors)
        self.instance_path = instance_path
        message = "; ".join(self.errors)
        if instance_path:
            message = f"{instance_path}: {message}"
        super().__init__(message)


class ValidationResult:
    """
    Result of validating a JSON value against a schema.

    Results are immutable, so a single instance may be returned from any
    number of validator calls. The errors property hands out a copy.
    """

    __slots__ = ('_is_valid', '_errors', '_instance_path')

    def __init__(self, is_valid: bool, errors: Optional[Iterable[str]] = None, instance_path: Optional[str] = None):
        errors = tuple(errors or ())
        if is_valid and errors:
            raise ValueError("A valid result cannot carry error messages")
        if not is_valid and not errors:
            raise ValueError("An invalid result must carry at least one error message")
        object.__setattr__(self, '_is_valid', bool(is_valid))
        object.__setattr__(self, '_errors', errors)
        object.__setattr__(self, '_instance_path', instance_path)

    def __setattr__(self, name, value):
        raise AttributeError(f"ValidationResult is immutable, cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"ValidationResult is immutable, cannot delete '{name}'")

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    @property
    def errors(self) -> List[str]:
        """The error messages in order; empty for a valid result."""
        return list(self._errors)

    @property
    def instance_path(self) -> Optional[str]:
        return self._instance_path

    @classmethod
    def valid(cls) -> 'ValidationResult':
        """Creates a valid result."""
        return cls(True)

    @classmethod
    def invalid(cls, errors: Iterable[str]) -> 'ValidationResult':
        """Creates an invalid result from one or more messages."""
        return cls(False, errors)

    def with_instance_path(self, instance_path: str) -> 'ValidationResult':
        """Returns a copy of this result labelled with an instance location."""
        return ValidationResult(self._is_valid, self._errors, instance_path)

    def raise_for_errors(self) -> None:
        """Raises SchemaValidationError if this result is invalid."""
        if not self._is_valid:
            raise SchemaValidationError(self._errors, self._instance_path)

    def __bool__(self) -> bool:
        return self._is_valid

    def __eq__(self, other) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._is_valid == other._is_valid and self._errors == other._errors

    def __hash__(self) -> int:
        return hash((self._is_valid, self._errors))

    def __str__(self) -> str:
        if self.is_valid:
            return "✓ Valid" + (f": {self.instance_path}" if self.instance_path else "")
        prefix = f"{self.instance_path}: " if self.instance_path else ""
        return f"✗ Invalid: {prefix}" + "; ".join(self.errors)

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"
