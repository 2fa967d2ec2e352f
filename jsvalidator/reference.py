"""Resolution of local '$ref' references.

Only references into the same document are supported: '#' for the schema
root, and '#/...' JSON Pointers (percent-encoded) into the root document.
Every resolution failure becomes a validator that always fails, never an
exception escaping to the caller.
"""

import logging
import re
from typing import Any, Callable
from urllib.parse import unquote

from jsonpointer import unescape

from jsvalidator.combinators import Validator, invalid
from jsvalidator.common import is_array, is_object
from jsvalidator.result import ValidationResult
from jsvalidator.schemanode import SchemaNode

logger = logging.getLogger(__name__)

ARRAY_INDEX = re.compile(r'^(0|[1-9][0-9]*)$')


class ReferenceResolutionError(Exception):
    """Raised when a '$ref' cannot be resolved against the root document."""

    def __init__(self, message: str, reference: str):
        self.message = message
        self.reference = reference
        super().__init__(message)


def resolve_reference(document: Any, reference: str) -> Any:
    """
    Resolves a local reference against the root schema document.

    Parameters:
    document (any): The root schema document.
    reference (str): The '$ref' value.

    Returns:
    any: The raw schema node the reference points to.

    Raises:
    ReferenceResolutionError: If the reference is remote, malformed, or points nowhere.
    """
    if not reference.startswith('#'):
        raise ReferenceResolutionError(f"Remote $ref '{reference}' is not yet supported", reference)
    fragment = reference[1:]
    if fragment == '':
        return document
    if not fragment.startswith('/'):
        raise ReferenceResolutionError(f"Remote $ref '{reference}' is not yet supported", reference)

    # '~' not followed by 0 or 1 is kept literally
    parts = [unescape(segment) for segment in unquote(fragment).split('/')[1:]]

    node = document
    for part in parts:
        if is_object(node) and part in node:
            node = node[part]
        elif is_array(node) and ARRAY_INDEX.match(part) and int(part) < len(node):
            node = node[int(part)]
        else:
            raise ReferenceResolutionError(f"Reference not found '{part}' in '{reference}'", reference)
    return node


def validator_for_reference(reference: str, scope, compile_schema: Callable[[SchemaNode, Any], Validator]) -> Validator:
    """
    Creates the validator for a '$ref'.

    A reference met again before the compiler has descended into a child
    value would expand forever and is rejected as circular. A reference met
    again below a child value (a recursive schema) is expanded lazily, when
    the validator is applied to that smaller value.

    Parameters:
    reference (str): The '$ref' value.
    scope (CompileScope): The compile scope holding the root schema and the reference chain.
    compile_schema (callable): Compiles a schema node within a scope into a validator.

    Returns:
    Validator: The validator for the referenced schema, or one that always fails.
    """
    if reference in scope.level:
        logger.warning("Circular $ref '%s' does not descend into the value", reference)
        return invalid(f"Circular $ref '{reference}' does not descend into the value")

    try:
        node = SchemaNode.decode(resolve_reference(scope.root.schema, reference))
    except ReferenceResolutionError as e:
        logger.warning("Unresolvable $ref: %s", e.message)
        return invalid(e.message)

    if reference in scope.stack:
        def validate_recursive_reference(value: Any) -> ValidationResult:
            return compile_schema(node, scope.restart(reference))(value)
        return validate_recursive_reference

    return compile_schema(node, scope.enter(reference))
