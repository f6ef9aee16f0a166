"""Small JSON helpers: a cheap structural check and a JSON-schema validator."""

from __future__ import annotations

import json
from typing import Any

import jsonschema
import jsonschema.exceptions
import jsonschema.validators

from .errors import MofkaError


def validate_is_json(text: str) -> bool:
    """Check that brackets and braces outside of string literals are balanced."""
    brackets: list[str] = []
    inside_string = False
    escaped = False
    pairs = {"}": "{", "]": "["}
    for c in text:
        if not escaped:
            if c == '"':
                inside_string = not inside_string
                if not inside_string:
                    escaped = False
            elif not inside_string:
                if c in "{[":
                    brackets.append(c)
                elif c in "}]":
                    if not brackets:
                        return False
                    if brackets.pop() != pairs[c]:
                        return False
        if inside_string:
            escaped = (not escaped) if c == "\\" else False
    return not brackets


def _json_pointer(path) -> str:
    return "".join(
        "/" + str(part).replace("~", "~0").replace("/", "~1") for part in path
    )


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class JsonSchemaValidator:
    """Validate JSON documents against a JSON schema, collecting error messages."""

    def __init__(self, schema):
        if isinstance(schema, (str, bytes, bytearray)):
            schema = json.loads(schema)
        cls = jsonschema.validators.validator_for(schema)
        try:
            cls.check_schema(schema)
        except jsonschema.exceptions.SchemaError as ex:
            raise MofkaError(f"Invalid JSON schema: {ex.message}") from ex
        self.schema = schema
        self._validator = cls(schema)

    def validate(self, instance) -> list[str]:
        """Return the list of errors found in ``instance`` (a string is parsed first)."""
        if isinstance(instance, (str, bytes, bytearray)):
            instance = json.loads(instance)
        errors = sorted(
            self._validator.iter_errors(instance),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        return [
            f"'{_json_pointer(e.absolute_path)}' - '{_dump(e.instance)}': {e.message}"
            for e in errors
        ]