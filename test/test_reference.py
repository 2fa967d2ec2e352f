"""Tests for local '$ref' resolution."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsvalidator.compiler import CompileScope, compile_schema
from jsvalidator.reference import ReferenceResolutionError, resolve_reference, validator_for_reference
from jsvalidator.schema import Schema, validate


class TestResolveReference(unittest.TestCase):
    """Test walking the root document by JSON Pointer."""

    document = {
        "definitions": {
            "foo": {"type": "string"},
            "a/b": {"type": "integer"},
            "with space": {"type": "null"},
            "tilde~": {"type": "boolean"},
        },
        "list": [{"type": "array"}, {"type": "object"}],
    }

    def test_root(self):
        self.assertIs(resolve_reference(self.document, "#"), self.document)

    def test_object_path(self):
        self.assertEqual(resolve_reference(self.document, "#/definitions/foo"), {"type": "string"})

    def test_array_index(self):
        self.assertEqual(resolve_reference(self.document, "#/list/1"), {"type": "object"})

    def test_escapes(self):
        """'~1' and '~0' are JSON Pointer escapes; '%20' is percent-encoding."""
        self.assertEqual(resolve_reference(self.document, "#/definitions/a~1b"), {"type": "integer"})
        self.assertEqual(resolve_reference(self.document, "#/definitions/tilde~0"), {"type": "boolean"})
        self.assertEqual(resolve_reference(self.document, "#/definitions/with%20space"), {"type": "null"})

    def test_literal_tilde(self):
        """A '~' that starts no escape sequence is part of the key."""
        document = {"definitions": {"a~2b": {"type": "string"}}}
        self.assertEqual(resolve_reference(document, "#/definitions/a~2b"), {"type": "string"})
        self.assertTrue(validate("x", dict(document, **{"$ref": "#/definitions/a~2b"})).is_valid)
        with self.assertRaises(ReferenceResolutionError) as context:
            resolve_reference(document, "#/definitions/c~2d")
        self.assertEqual(context.exception.message, "Reference not found 'c~2d' in '#/definitions/c~2d'")

    def test_missing_segment(self):
        with self.assertRaises(ReferenceResolutionError) as context:
            resolve_reference(self.document, "#/definitions/bar")
        self.assertEqual(context.exception.message, "Reference not found 'bar' in '#/definitions/bar'")

    def test_index_out_of_range(self):
        for reference, segment in [("#/list/2", "2"), ("#/list/-1", "-1"), ("#/list/01", "01"), ("#/list/x", "x")]:
            with self.assertRaises(ReferenceResolutionError) as context:
                resolve_reference(self.document, reference)
            self.assertEqual(context.exception.message, f"Reference not found '{segment}' in '{reference}'")

    def test_non_navigable_node(self):
        with self.assertRaises(ReferenceResolutionError) as context:
            resolve_reference(self.document, "#/definitions/foo/type/0")
        self.assertEqual(context.exception.message, "Reference not found '0' in '#/definitions/foo/type/0'")

    def test_remote_references(self):
        for reference in ["http://example.com/schema.json", "other.json#/a", "#foo"]:
            with self.assertRaises(ReferenceResolutionError) as context:
                resolve_reference(self.document, reference)
            self.assertEqual(context.exception.message, f"Remote $ref '{reference}' is not yet supported")


class TestReferenceValidation(unittest.TestCase):
    """Test '$ref' inside schemas."""

    def test_definitions_reference(self):
        schema = {
            "definitions": {"positive": {"type": "integer", "minimum": 1}},
            "properties": {"count": {"$ref": "#/definitions/positive"}},
        }
        self.assertTrue(validate({"count": 3}, schema).is_valid)
        self.assertEqual(validate({"count": 0}, schema).errors, ["Value is lower than minimum value of 1"])

    def test_unresolvable_reference_is_a_failure(self):
        schema = {"properties": {"a": {"$ref": "#/definitions/missing"}}}
        result = validate({"a": 1}, schema)
        self.assertEqual(result.errors, ["Reference not found 'definitions' in '#/definitions/missing'"])
        # the reference is only applied where its schema applies
        self.assertTrue(validate({}, schema).is_valid)

    def test_remote_reference_is_a_failure(self):
        result = validate(1, {"$ref": "http://json-schema.org/draft-04/schema#"})
        self.assertEqual(result.errors, ["Remote $ref 'http://json-schema.org/draft-04/schema#' is not yet supported"])

    def test_root_reference_matches_root_schema(self):
        """Validating through '#' gives the same result as validating against the root."""
        document = {"type": "object", "required": ["a"], "properties": {"a": {"type": "string"}}}
        schema = Schema(document)
        reference_validator = validator_for_reference("#", CompileScope(schema), compile_schema)
        for value in [{"a": "x"}, {"a": 1}, {}, [], "a"]:
            self.assertEqual(reference_validator(value), schema.validate(value))

    def test_recursive_schema(self):
        """A reference back to the root below a child value validates trees."""
        schema = {
            "type": "object",
            "required": ["value"],
            "properties": {
                "value": {"type": "integer"},
                "children": {"type": "array", "items": {"$ref": "#"}},
            },
        }
        tree = {"value": 1, "children": [{"value": 2, "children": [{"value": 3}]}, {"value": 4}]}
        self.assertTrue(validate(tree, schema).is_valid)
        broken = {"value": 1, "children": [{"value": 2, "children": [{"value": "3"}]}]}
        self.assertEqual(validate(broken, schema).errors, ["\"3\" is not of type 'integer'"])

    def test_mutually_recursive_definitions(self):
        schema = {
            "definitions": {
                "node": {"type": "object", "properties": {"next": {"$ref": "#/definitions/link"}}},
                "link": {"anyOf": [{"type": "null"}, {"$ref": "#/definitions/node"}]},
            },
            "$ref": "#/definitions/node",
        }
        self.assertTrue(validate({"next": {"next": {"next": None}}}, schema).is_valid)
        self.assertFalse(validate({"next": {"next": 5}}, schema).is_valid)

    def test_circular_reference_terminates(self):
        """A reference cycle that never descends into the value is reported, not followed forever."""
        self_reference = validate(1, {"$ref": "#"})
        self.assertEqual(self_reference.errors, ["Circular $ref '#' does not descend into the value"])

        schema = {
            "definitions": {"a": {"$ref": "#/definitions/b"}, "b": {"allOf": [{"$ref": "#/definitions/a"}]}},
            "$ref": "#/definitions/a",
        }
        result = validate(1, schema)
        self.assertEqual(result.errors, ["Circular $ref '#/definitions/a' does not descend into the value"])

    def test_nested_reference_resolves_against_root(self):
        schema = {
            "definitions": {"name": {"type": "string"}},
            "items": {"properties": {"n": {"$ref": "#/definitions/name"}}},
        }
        self.assertTrue(validate([{"n": "a"}], schema).is_valid)
        self.assertFalse(validate([{"n": 1}], schema).is_valid)


if __name__ == '__main__':
    unittest.main()
