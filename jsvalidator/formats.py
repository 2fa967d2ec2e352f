"""Validators for the 'format' keyword.

Only the network address formats ship by default. Callers register further
formats by passing a mapping of format name to validator when building a
Schema.
"""

from ipaddress import AddressValueError, IPv4Address, IPv6Address
from types import MappingProxyType
from typing import Any, Mapping, Optional

from jsvalidator.combinators import VALID, Validator
from jsvalidator.result import ValidationResult


def validate_ipv4(value: Any) -> ValidationResult:
    """Validates the dotted-quad IPv4 address grammar."""
    if not isinstance(value, str):
        return VALID
    try:
        IPv4Address(value)
    except AddressValueError:
        return ValidationResult.invalid([f"'{value}' is not a valid IPv4 address"])
    return VALID


def validate_ipv6(value: Any) -> ValidationResult:
    """Validates the textual IPv6 address grammar (RFC 4291), without zone ids."""
    if not isinstance(value, str):
        return VALID
    if '%' in value:
        return ValidationResult.invalid([f"'{value}' is not a valid IPv6 address"])
    try:
        IPv6Address(value)
    except AddressValueError:
        return ValidationResult.invalid([f"'{value}' is not a valid IPv6 address"])
    return VALID


DEFAULT_FORMATS: Mapping[str, Validator] = MappingProxyType({
    'ipv4': validate_ipv4,
    'ipv6': validate_ipv6,
})


def build_format_registry(formats: Optional[Mapping[str, Validator]] = None) -> Mapping[str, Validator]:
    """
    Builds an immutable format registry.

    Parameters:
    formats (Mapping[str, Validator], optional): Extra or overriding format validators.

    Returns:
    Mapping[str, Validator]: A read-only view of the default formats merged with the extras.
    """
    registry = dict(DEFAULT_FORMATS)
    if formats:
        registry.update(formats)
    return MappingProxyType(registry)
