"""Shared schema validation utilities.

Schemas are JSON Schema documents stored as YAML under
``forklaunch/data/schemas/`` and loaded in a single, consistent way.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from forklaunch.core.errors import ConfigError
from forklaunch.data import read_schema


class SchemaValidationError(ConfigError):
    """Raised when schema validation fails."""


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema by name (``config.schema`` or ``config.schema.yaml``).

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    return read_schema(schema_name)


def validate_payload_safe(payload: Dict[str, Any], schema_name: str) -> List[str]:
    """Validate a payload and return error messages (empty if valid)."""
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: str(list(e.path))):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': " + "; ".join(errors)
        )


__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]
