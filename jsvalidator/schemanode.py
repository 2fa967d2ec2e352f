"""Typed representation of a JSON schema node.

A raw schema dict is decoded once into a SchemaNode carrying one optional
field per supported keyword. Keyword values of the wrong JSON kind are
dropped during decoding, so the compiler only ever sees well-typed values.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

from jsvalidator.common import PRIMITIVE_TYPES, is_array, is_number, is_object

Number = Union[int, float]


@dataclass(frozen=True)
class SchemaNode:
    """A decoded schema node. Absent keywords are None (or their JSON Schema default)."""
    title: Optional[str] = None
    description: Optional[str] = None
    ref: Optional[str] = None
    types: Optional[FrozenSet[str]] = None
    all_of: Optional[Tuple['SchemaNode', ...]] = None
    any_of: Optional[Tuple['SchemaNode', ...]] = None
    one_of: Optional[Tuple['SchemaNode', ...]] = None
    not_: Optional['SchemaNode'] = None
    enum: Optional[Tuple[Any, ...]] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    multiple_of: Optional[Number] = None
    minimum: Optional[Number] = None
    exclusive_minimum: bool = False
    maximum: Optional[Number] = None
    exclusive_maximum: bool = False
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False
    items: Optional['SchemaNode'] = None
    tuple_items: Optional[Tuple['SchemaNode', ...]] = None
    additional_items: Union['SchemaNode', bool] = True
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    required: Optional[Tuple[str, ...]] = None
    properties: Optional[Dict[str, 'SchemaNode']] = None
    pattern_properties: Optional[Dict[str, 'SchemaNode']] = None
    additional_properties: Union['SchemaNode', bool, None] = None
    dependencies: Optional[Dict[str, Union['SchemaNode', Tuple[str, ...]]]] = None
    format: Optional[str] = None

    @property
    def has_object_properties(self) -> bool:
        """True if any of properties, patternProperties or additionalProperties is present."""
        return (self.properties is not None
                or self.pattern_properties is not None
                or self.additional_properties is not None)

    @classmethod
    def decode(cls, schema: Any) -> 'SchemaNode':
        """
        Decodes a raw schema value into a SchemaNode.

        Non-object schema values decode to an empty node, which accepts every value.

        Parameters:
        schema (any): The raw schema value, usually a dict.

        Returns:
        SchemaNode: The decoded node, with nested schemas decoded recursively.
        """
        if not is_object(schema):
            return cls()
        return cls(
            title=_string(schema.get('title')),
            description=_string(schema.get('description')),
            ref=_string(schema.get('$ref')),
            types=decode_types(schema.get('type')),
            all_of=_schema_list(schema.get('allOf')),
            any_of=_schema_list(schema.get('anyOf')),
            one_of=_schema_list(schema.get('oneOf')),
            not_=cls.decode(schema['not']) if is_object(schema.get('not')) else None,
            enum=tuple(schema['enum']) if is_array(schema.get('enum')) else None,
            max_length=_integer(schema.get('maxLength')),
            min_length=_integer(schema.get('minLength')),
            pattern=_string(schema.get('pattern')),
            multiple_of=_number(schema.get('multipleOf')),
            minimum=_number(schema.get('minimum')),
            exclusive_minimum=schema.get('exclusiveMinimum') is True,
            maximum=_number(schema.get('maximum')),
            exclusive_maximum=schema.get('exclusiveMaximum') is True,
            min_items=_integer(schema.get('minItems')),
            max_items=_integer(schema.get('maxItems')),
            unique_items=schema.get('uniqueItems') is True,
            items=cls.decode(schema['items']) if is_object(schema.get('items')) else None,
            tuple_items=_schema_list(schema.get('items')),
            additional_items=_schema_or_bool(schema.get('additionalItems'), default=True),
            max_properties=_integer(schema.get('maxProperties')),
            min_properties=_integer(schema.get('minProperties')),
            required=_string_list(schema.get('required')),
            properties=_schema_map(schema.get('properties')),
            pattern_properties=_schema_map(schema.get('patternProperties')),
            additional_properties=_schema_or_bool(schema.get('additionalProperties'), default=None),
            dependencies=_dependencies(schema.get('dependencies')),
            format=_string(schema.get('format')),
        )


def decode_types(value: Any) -> Optional[FrozenSet[str]]:
    """
    Decodes the 'type' keyword into a set of primitive type tags.

    A single unrecognized tag yields the empty set; unrecognized entries of a
    tag array are dropped. Returns None when the keyword is absent or malformed.
    """
    if isinstance(value, str):
        if value in PRIMITIVE_TYPES:
            return frozenset([value])
        return frozenset()
    if is_array(value):
        return frozenset(t for t in value if isinstance(t, str) and t in PRIMITIVE_TYPES)
    return None


def _string(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _number(value: Any) -> Optional[Number]:
    return value if is_number(value) else None


def _integer(value: Any) -> Optional[int]:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _string_list(value: Any) -> Optional[Tuple[str, ...]]:
    if not is_array(value):
        return None
    return tuple(v for v in value if isinstance(v, str))


def _schema_list(value: Any) -> Optional[Tuple[SchemaNode, ...]]:
    if not is_array(value):
        return None
    return tuple(SchemaNode.decode(v) for v in value)


def _schema_map(value: Any) -> Optional[Dict[str, SchemaNode]]:
    if not is_object(value):
        return None
    return {key: SchemaNode.decode(v) for key, v in value.items()}


def _schema_or_bool(value: Any, default):
    if is_object(value):
        return SchemaNode.decode(value)
    if isinstance(value, bool):
        return value
    return default


def _dependencies(value: Any) -> Optional[Dict[str, Union[SchemaNode, Tuple[str, ...]]]]:
    if not is_object(value):
        return None
    dependencies: Dict[str, Union[SchemaNode, Tuple[str, ...]]] = {}
    for key, dependency in value.items():
        if is_object(dependency):
            dependencies[key] = SchemaNode.decode(dependency)
        elif is_array(dependency):
            dependencies[key] = tuple(d for d in dependency if isinstance(d, str))
    return dependencies
