"""Validates JSON instance files against a JSON schema file.

Instance files may hold a single JSON value, a JSON array of instances, or
JSON Lines (one instance per line).
"""

import json
import logging
from typing import Any, List, Tuple

from jsvalidator.result import ValidationResult
from jsvalidator.schema import Schema

logger = logging.getLogger(__name__)


def load_instances(instance_file: str, schema_is_array: bool) -> List[Tuple[str, Any]]:
    """Loads the instances of a file, paired with their location labels.

    Args:
        instance_file: Path to JSON file (single object, array, or JSONL)
        schema_is_array: Whether the schema expects an array at the root

    Returns:
        List of (instance_path, instance) tuples. Lines of a JSONL file that
        fail to parse are returned as (instance_path, JSONDecodeError).
    """
    with open(instance_file, 'r', encoding='utf-8') as f:
        content = f.read().strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        logger.debug("%s is not a single JSON document, reading as JSON Lines", instance_file)
    else:
        if isinstance(data, list) and not schema_is_array:
            # Schema expects individual items, validate each array element
            return [(f"{instance_file}[{i}]", item) for i, item in enumerate(data)]
        return [(instance_file, data)]

    instances: List[Tuple[str, Any]] = []
    for i, line in enumerate(content.split('\n')):
        line = line.strip()
        if not line:
            continue
        try:
            instances.append((f"{instance_file}:{i+1}", json.loads(line)))
        except json.JSONDecodeError as e:
            instances.append((f"{instance_file}:{i+1}", e))
    return instances


def validate_file(instance_file: str, schema_file: str) -> List[ValidationResult]:
    """Validates JSON instance file(s) against a schema file.

    Args:
        instance_file: Path to JSON file (single object, array, or JSONL)
        schema_file: Path to JSON schema file

    Returns:
        List of ValidationResult for each instance in the file
    """
    with open(schema_file, 'r', encoding='utf-8') as f:
        schema = Schema(json.load(f))

    schema_is_array = schema.types is not None and 'array' in schema.types

    results = []
    for path, instance in load_instances(instance_file, schema_is_array):
        if isinstance(instance, json.JSONDecodeError):
            result = ValidationResult.invalid([f"Invalid JSON: {instance.msg}"])
        else:
            result = schema.validate(instance)
        results.append(result.with_instance_path(path))
    return results


def validate_json_instances(
    input_files: List[str],
    schema_file: str,
    verbose: bool = False
) -> Tuple[int, int]:
    """Validates multiple JSON instance files against a schema.

    Args:
        input_files: List of JSON file paths to validate
        schema_file: Path to schema file
        verbose: Whether to print validation results

    Returns:
        Tuple of (valid_count, invalid_count)
    """
    valid_count = 0
    invalid_count = 0

    for input_file in input_files:
        for result in validate_file(input_file, schema_file):
            if result.is_valid:
                valid_count += 1
            else:
                invalid_count += 1
            if verbose:
                print(result)

    return valid_count, invalid_count
