"""Schema validation service using jsonschema library."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import jsonschema
from jsonschema.exceptions import ValidationError as JsonSchemaError

from specforge.schemas.loader import load_schema, validation_view

ROOT_PATH = "(root)"


@dataclass(frozen=True)
class Violation:
    """A single schema violation located by a dotted field path."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


def format_path(parts: Iterable[Any]) -> str:
    """Render a jsonschema error path as ``relationships.0.type``."""
    rendered = ".".join(str(p) for p in parts)
    return rendered or ROOT_PATH


def _to_violation(error: JsonSchemaError) -> Violation:
    path = list(error.absolute_path)
    if error.validator == "required" and isinstance(error.instance, dict):
        # Point at the missing key itself rather than its parent object.
        missing = [key for key in error.validator_value if key not in error.instance]
        for key in missing:
            if repr(key) in error.message:
                path.append(key)
                return Violation(format_path(path), "is a required property")
    return Violation(format_path(path), error.message)


class SchemaValidator:
    """Validates candidate documents against the registered contract schemas.

    Validation is total: every violation in the document is collected, none
    is short-circuited, so generator drift can be diagnosed from one error.
    """

    def __init__(self):
        self._validators: dict[str, jsonschema.Draft202012Validator] = {}

    def _validator_for(self, schema_name: str) -> jsonschema.Draft202012Validator:
        validator = self._validators.get(schema_name)
        if validator is None:
            schema = validation_view(load_schema(schema_name))
            jsonschema.Draft202012Validator.check_schema(schema)
            validator = jsonschema.Draft202012Validator(schema)
            self._validators[schema_name] = validator
        return validator

    def violations(self, instance: Any, schema_name: str) -> list[Violation]:
        """Return every violation of ``instance`` against a named schema, sorted by path.

        Raises:
            KeyError: If schema_name not in registry.
        """
        found = [_to_violation(e) for e in self._validator_for(schema_name).iter_errors(instance)]
        return sorted(found, key=lambda v: (v.path, v.message))

    def is_valid(self, instance: Any, schema_name: str) -> bool:
        return not self.violations(instance, schema_name)
