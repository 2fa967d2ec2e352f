"""Validates JSON values against JSON schema documents.

The Schema class wraps a root schema document. Each call to validate
compiles the document into validators and applies them to the value; no
compiled state is kept between calls.
"""

import logging
from typing import Any, FrozenSet, List, Mapping, Optional

from jsvalidator.combinators import Validator, all_of
from jsvalidator.compiler import CompileScope, compile_validators
from jsvalidator.formats import build_format_registry
from jsvalidator.result import ValidationResult
from jsvalidator.schemanode import SchemaNode

logger = logging.getLogger(__name__)

ROOT_REFERENCE = '#'


class Schema:
    """
    A root JSON schema document.

    Attributes:
    title: The schema's 'title', if any.
    description: The schema's 'description', if any.
    types: The primitive type tags named by the schema's 'type' keyword, None if absent.
    formats: Read-only registry of 'format' validators.
    schema: The root schema document, used to resolve '$ref' values.
    """

    def __init__(self, schema: Any, formats: Optional[Mapping[str, Validator]] = None):
        """Initialize the schema context.

        Args:
            schema: The parsed JSON schema document
            formats: Extra 'format' validators by name, merged over the defaults
        """
        node = SchemaNode.decode(schema)
        self.title: Optional[str] = node.title
        self.description: Optional[str] = node.description
        self.types: Optional[FrozenSet[str]] = node.types
        self.formats = build_format_registry(formats)
        self.schema = schema

    def validators(self) -> List[Validator]:
        """Compiles the root schema into its keyword validators."""
        scope = CompileScope(self).enter(ROOT_REFERENCE)
        validators = compile_validators(SchemaNode.decode(self.schema), scope)
        logger.debug("Compiled %d validators for schema '%s'", len(validators), self.title or ROOT_REFERENCE)
        return validators

    def validate(self, value: Any) -> ValidationResult:
        """Validates a JSON value against the schema.

        Args:
            value: The JSON value to validate

        Returns:
            ValidationResult with validation status and any errors
        """
        return all_of(self.validators())(value)

    def __repr__(self) -> str:
        return f"Schema(title={self.title!r}, types={sorted(self.types) if self.types is not None else None})"


def validate(value: Any, schema: Any, formats: Optional[Mapping[str, Validator]] = None) -> ValidationResult:
    """Validates a JSON value against a JSON schema document.

    Args:
        value: The JSON value to validate
        schema: The parsed JSON schema document
        formats: Extra 'format' validators by name, merged over the defaults

    Returns:
        ValidationResult with validation status and any errors
    """
    return Schema(schema, formats).validate(value)
