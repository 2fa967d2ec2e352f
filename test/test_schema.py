"""Tests for the Schema context and the validate entry point."""

import os
import sys
import unittest

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

import jsvalidator
from jsvalidator.result import ValidationResult
from jsvalidator.schema import Schema, validate


@pytest.mark.parametrize("schema,value,is_valid", [
    ({"type": "integer", "minimum": 0}, 5, True),
    ({"type": "integer", "minimum": 0}, -1, False),
    ({"type": "object", "required": ["name"], "properties": {"name": {"type": "string"}}}, {"name": "a"}, True),
    ({"type": "object", "required": ["name"], "properties": {"name": {"type": "string"}}}, {}, False),
    ({"oneOf": [{"type": "string"}, {"type": "number"}]}, "x", True),
    ({"oneOf": [{"type": "string"}, {"type": "number"}]}, True, False),
    ({"oneOf": [{"type": "number"}, {"type": "integer"}]}, 1, False),
    ({"format": "ipv4"}, "192.168.0.1", True),
    ({"format": "ipv4"}, "not-an-ip", False),
    ({"$ref": "#/defs/x", "defs": {"x": {"type": "boolean"}}}, True, True),
    ({"$ref": "#/defs/x", "defs": {"x": {"type": "boolean"}}}, 1, False),
])
def test_examples(schema, value, is_valid):
    assert validate(value, schema).is_valid is is_valid


def test_minimum_message():
    assert validate(-1, {"type": "integer", "minimum": 0}) == ValidationResult.invalid(
        ["Value is lower than minimum value of 0"])


def test_one_of_messages_are_distinguishable():
    schema = {"oneOf": [{"type": "number"}, {"type": "integer"}]}
    none_matched = validate("x", schema)
    many_matched = validate(1, schema)
    assert none_matched.errors[0] != many_matched.errors[0]


class TestSchema(unittest.TestCase):
    """Test the Schema context."""

    def test_metadata(self):
        schema = Schema({"title": "Person", "description": "A person", "type": ["object", "null", "color"]})
        self.assertEqual(schema.title, "Person")
        self.assertEqual(schema.description, "A person")
        self.assertEqual(schema.types, frozenset(["object", "null"]))

    def test_metadata_absent(self):
        schema = Schema({})
        self.assertIsNone(schema.title)
        self.assertIsNone(schema.description)
        self.assertIsNone(schema.types)

    def test_empty_schema_accepts_everything(self):
        for value in [None, 0, 1.5, "a", [1], {"a": 1}, True]:
            self.assertTrue(validate(value, {}).is_valid)

    def test_formats_are_read_only(self):
        schema = Schema({})
        with self.assertRaises(TypeError):
            schema.formats["email"] = None
        self.assertEqual(sorted(schema.formats), ["ipv4", "ipv6"])

    def test_custom_format(self):
        """Callers can register formats when building a schema."""
        def validate_even(value):
            if isinstance(value, int) and value % 2:
                return ValidationResult.invalid([f"{value} is not even"])
            return ValidationResult.valid()

        schema = {"format": "even"}
        self.assertEqual(validate(3, schema).errors, ["'format' validation of 'even' is not supported"])
        self.assertTrue(validate(4, schema, formats={"even": validate_even}).is_valid)
        self.assertEqual(Schema(schema, formats={"even": validate_even}).validate(3).errors, ["3 is not even"])

    def test_deterministic(self):
        schema = Schema({"type": "object", "properties": {"a": {"enum": [1, 2]}}, "required": ["b", "c"]})
        first = schema.validate({"a": 3})
        for _ in range(3):
            self.assertEqual(schema.validate({"a": 3}), first)

    def test_returned_results_do_not_affect_later_calls(self):
        first = validate(1, {})
        first.errors.append("caller note")
        with self.assertRaises(AttributeError):
            first.is_valid = False
        self.assertEqual(validate(2, {"type": "integer"}), ValidationResult.valid())
        self.assertEqual(validate(2, {"type": "integer"}).errors, [])

    def test_errors_from_every_keyword(self):
        """Failures are not short-circuited; keyword order sets message order."""
        schema = {"type": "string", "minimum": 10, "enum": ["a"]}
        result = validate(5, schema)
        self.assertEqual(result.errors, ["5 is not of type 'string'", "5 is not one of the permitted values [\"a\"]",
                                         "Value is lower than minimum value of 10"])

    def test_validators_per_keyword(self):
        schema = Schema({"type": "string", "minLength": 1, "maxLength": 5, "title": "Name"})
        self.assertEqual(len(schema.validators()), 3)

    def test_conjunction_of_keywords(self):
        """A value satisfies a schema exactly when it satisfies each keyword alone."""
        keywords = {"type": "integer", "minimum": 2, "maximum": 8, "multipleOf": 2}
        for value in range(0, 12):
            individually = all(validate(value, {k: v}).is_valid for k, v in keywords.items())
            self.assertEqual(validate(value, keywords).is_valid, individually)

    def test_lazy_package_attributes(self):
        self.assertIs(jsvalidator.Schema, Schema)
        self.assertTrue(jsvalidator.validate({"a": 1}, {"type": "object"}).is_valid)
        self.assertIs(jsvalidator.formats.DEFAULT_FORMATS, jsvalidator.DEFAULT_FORMATS)
        self.assertFalse(hasattr(jsvalidator, "no_such_name"))
        with self.assertRaises(AttributeError):
            jsvalidator.no_such_name


if __name__ == '__main__':
    unittest.main()
