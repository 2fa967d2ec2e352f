"""Compiles schema nodes into validators.

The compiler walks a decoded SchemaNode and produces one validator per
keyword present, in a fixed keyword order. Nested schemas are compiled
recursively against the same root schema, so a '$ref' anywhere in the tree
resolves against the top-level document.
"""

# pylint: disable=too-many-branches, too-many-statements

import logging
import operator
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Tuple, Union

from jsvalidator import keywords
from jsvalidator.combinators import Validator, all_of, any_of, invalid, not_, one_of, valid
from jsvalidator.reference import validator_for_reference
from jsvalidator.schemanode import SchemaNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileScope:
    """
    The context a schema node is compiled in.

    Attributes:
    root: The Schema whose document '$ref' values resolve against.
    stack: Every '$ref' currently being expanded.
    level: The '$ref' values expanded since the compiler last descended into a child value.
    """
    root: Any
    stack: Tuple[str, ...] = ()
    level: Tuple[str, ...] = ()

    def enter(self, reference: str) -> 'CompileScope':
        """Scope for expanding a reference at the current value."""
        return replace(self, stack=self.stack + (reference,), level=self.level + (reference,))

    def descend(self) -> 'CompileScope':
        """Scope for a schema applied to a child value (array element or object member)."""
        return replace(self, level=())

    def restart(self, reference: str) -> 'CompileScope':
        """Scope for a recursive reference expanded when it is applied."""
        return CompileScope(self.root, (reference,), (reference,))


def compile_schema(node: SchemaNode, scope: CompileScope) -> Validator:
    """Compiles a schema node into a single validator accepting values valid against every keyword."""
    return all_of(compile_validators(node, scope))


def compile_validators(node: SchemaNode, scope: CompileScope) -> List[Validator]:
    """
    Compiles a schema node into the list of its keyword validators.

    Parameters:
    node (SchemaNode): The decoded schema node.
    scope (CompileScope): The compile scope.

    Returns:
    List[Validator]: One validator per keyword (or keyword group) present in the node.
    """
    validators: List[Validator] = []

    if node.ref is not None:
        validators.append(validator_for_reference(node.ref, scope, compile_schema))

    if node.types is not None:
        validators.append(keywords.validate_type(node.types))

    if node.all_of is not None:
        validators.append(all_of([compile_schema(s, scope) for s in node.all_of]))

    if node.any_of is not None:
        validators.append(any_of([compile_schema(s, scope) for s in node.any_of]))

    if node.one_of is not None:
        validators.append(one_of([compile_schema(s, scope) for s in node.one_of]))

    if node.not_ is not None:
        validators.append(not_(compile_schema(node.not_, scope)))

    if node.enum is not None:
        validators.append(keywords.validate_enum(node.enum))

    if node.max_length is not None:
        validators.append(keywords.validate_length(
            operator.le, node.max_length, f"Length of string is larger than max length {node.max_length}"))

    if node.min_length is not None:
        validators.append(keywords.validate_length(
            operator.ge, node.min_length, f"Length of string is smaller than minimum length {node.min_length}"))

    if node.pattern is not None:
        validators.append(keywords.validate_pattern(node.pattern))

    if node.multiple_of is not None:
        validators.append(keywords.validate_multiple_of(node.multiple_of))

    if node.minimum is not None:
        validators.append(keywords.validate_minimum(node.minimum, node.exclusive_minimum))

    if node.maximum is not None:
        validators.append(keywords.validate_maximum(node.maximum, node.exclusive_maximum))

    if node.min_items is not None:
        validators.append(keywords.validate_array_length(
            node.min_items, operator.ge, f"Length of array is smaller than the minimum {node.min_items}"))

    if node.max_items is not None:
        validators.append(keywords.validate_array_length(
            node.max_items, operator.le, f"Length of array is greater than maximum {node.max_items}"))

    if node.unique_items:
        validators.append(keywords.validate_unique_items)

    if node.items is not None:
        validators.append(keywords.validate_items(compile_schema(node.items, scope.descend())))
    elif node.tuple_items is not None:
        item_validators = [compile_schema(s, scope.descend()) for s in node.tuple_items]
        additional_items = _additional_validator(
            node.additional_items, scope, "Additional items are not permitted in this array")
        validators.append(keywords.validate_tuple_items(item_validators, additional_items))

    if node.max_properties is not None:
        validators.append(keywords.validate_properties_length(
            node.max_properties, operator.le,
            f"Amount of properties is greater than maximum permitted {node.max_properties}"))

    if node.min_properties is not None:
        validators.append(keywords.validate_properties_length(
            node.min_properties, operator.ge,
            f"Amount of properties is less than the required amount {node.min_properties}"))

    if node.required is not None:
        validators.append(keywords.validate_required(node.required))

    if node.has_object_properties:
        validators.append(keywords.validate_properties(
            _property_validators(node.properties, scope),
            _property_validators(node.pattern_properties, scope),
            _additional_validator(
                node.additional_properties, scope, "Additional properties are not permitted in this object")))

    if node.dependencies is not None:
        for key, dependency in node.dependencies.items():
            if isinstance(dependency, SchemaNode):
                validators.append(keywords.validate_dependency(key, compile_schema(dependency, scope)))
            else:
                validators.append(keywords.validate_dependencies(key, dependency))

    if node.format is not None:
        format_validator = scope.root.formats.get(node.format)
        if format_validator is not None:
            validators.append(format_validator)
        else:
            logger.warning("Unsupported format '%s' in schema", node.format)
            validators.append(invalid(f"'format' validation of '{node.format}' is not supported"))

    return validators


def _property_validators(properties: Union[Dict[str, SchemaNode], None], scope: CompileScope) -> Dict[str, Validator]:
    if not properties:
        return {}
    child_scope = scope.descend()
    return {key: compile_schema(schema, child_scope) for key, schema in properties.items()}


def _additional_validator(additional: Union[SchemaNode, bool, None], scope: CompileScope, error: str) -> Validator:
    """Validator for members not covered by the positional or named schemas."""
    if isinstance(additional, SchemaNode):
        return compile_schema(additional, scope.descend())
    if additional is False:
        return invalid(error)
    return valid
