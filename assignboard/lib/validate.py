"""
Schema validation for board data files.

Seed datasets are checked against schemas/<name>.schema.json before any
Snapshot is built from them. All violations are collected; the first one
(by document path) is reported, with a count of the rest.
"""

import json
from pathlib import Path

import jsonschema


class ValidationError(Exception):
    """Document does not match its schema."""

    def __init__(self, schema_name: str, message: str, path: str | None = None, error_count: int = 1):
        self.schema_name = schema_name
        self.path = path
        self.error_count = error_count
        detail = f"[{schema_name}] {message}"
        if path:
            detail += f" at {path}"
        if error_count > 1:
            detail += f" (and {error_count - 1} more)"
        super().__init__(detail)


_schema_cache: dict[str, dict] = {}


def _schema_path(schema_name: str) -> Path:
    return Path(__file__).parent.parent / "schemas" / f"{schema_name}.schema.json"


def _load_schema(schema_name: str) -> dict:
    if schema_name not in _schema_cache:
        path = _schema_path(schema_name)
        if not path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {path}")
        _schema_cache[schema_name] = json.loads(path.read_text())
    return _schema_cache[schema_name]


def _format_path(error: jsonschema.ValidationError) -> str:
    if not error.absolute_path:
        return "(root)"
    return ".".join(str(p) for p in error.absolute_path)


def validate(data: dict, schema_name: str) -> None:
    """
    Validate a parsed document against a named schema.

    Args:
        data: Parsed JSON/YAML document
        schema_name: Schema name, e.g. "seed"

    Raises:
        ValidationError: for the first violation by path, counting the others
    """
    schema = _load_schema(schema_name)
    validator_cls = jsonschema.validators.validator_for(schema)
    errors = sorted(
        validator_cls(schema).iter_errors(data),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    if errors:
        first = errors[0]
        raise ValidationError(schema_name, first.message, _format_path(first), error_count=len(errors))
