"""
JSON Schema checks for commitwatch settings.

Schemas live in commitwatch/schemas/<name>.schema.json. A value that
doesn't match is reported with the dotted path of the offending key, so
`max_files: ten` in .commitwatch.yaml fails as "... at max_files".
"""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


class ValidationError(Exception):
    """Settings don't match their schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        detail = f" at {path}" if path else ""
        super().__init__(f"[{schema_name}] {message}{detail}")


_schemas: dict[str, dict] = {}


def load_schema(schema_name: str) -> dict:
    """Read commitwatch/schemas/<schema_name>.schema.json once per process."""
    schema = _schemas.get(schema_name)
    if schema is None:
        schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"No schema at {schema_path}")
        schema = _schemas[schema_name] = json.loads(schema_path.read_text())
    return schema


def validate(data: dict, schema_name: str) -> None:
    """Raise ValidationError unless data matches the named schema."""
    try:
        jsonschema.validate(instance=data, schema=load_schema(schema_name))
    except jsonschema.ValidationError as e:
        key_path = ".".join(str(p) for p in e.absolute_path) or "(root)"
        raise ValidationError(schema_name, e.message, key_path) from None
