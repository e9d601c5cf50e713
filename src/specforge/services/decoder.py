"""Decode raw generator output and validate it against the schema contract."""

import json
import logging
import math
from typing import Any

from pydantic import BaseModel, ValidationError

from specforge.errors.exceptions import SchemaViolationError, UpstreamMalformedError
from specforge.models.app_spec import AppSpec
from specforge.models.review import SpecReview
from specforge.results import Err, Ok, Result
from specforge.schemas.validator import SchemaValidator, Violation, format_path

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _finite_float(literal: str) -> float:
    # Overflowing literals such as 1e400 parse to inf without hitting parse_constant.
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number {literal} is out of range")
    return value


def decode_json(raw: str) -> Result[Any]:
    """Parse raw text as JSON; the raw text travels with the failure."""
    try:
        return Ok(json.loads(raw, parse_float=_finite_float, parse_constant=_reject_constant))
    except (ValueError, TypeError):
        logger.warning("generation_malformed", extra={"raw_length": len(raw or "")})
        return Err(UpstreamMalformedError(raw))


def _model_violations(exc: ValidationError) -> list[Violation]:
    found = [Violation(format_path(err["loc"]), err["msg"]) for err in exc.errors()]
    return sorted(found, key=lambda v: (v.path, v.message))


class ContractValidator:
    """Turns parsed candidates into typed, guaranteed-valid artifacts.

    A candidate is either accepted whole or rejected with every violation
    listed; there is no partial acceptance. The model layer runs after the
    schema and catches values JSON Schema cannot express, such as numbers
    too large for a float.
    """

    def __init__(self, schema_validator: SchemaValidator | None = None):
        self.schema_validator = schema_validator or SchemaValidator()

    def _validate(self, data: Any, schema_name: str, model: type[BaseModel], status_code: int) -> Result[Any]:
        violations = self.schema_validator.violations(data, schema_name)
        if not violations:
            try:
                return Ok(model.model_validate(data))
            except ValidationError as exc:
                violations = _model_violations(exc)
        logger.warning(
            "schema_violation",
            extra={"schema": schema_name, "violations": [str(v) for v in violations]},
        )
        return Err(SchemaViolationError(violations, status_code=status_code))

    def validate_app_spec(self, data: Any, *, status_code: int = 502) -> Result[AppSpec]:
        return self._validate(data, "app-spec", AppSpec, status_code)

    def validate_spec_review(self, data: Any, *, status_code: int = 502) -> Result[SpecReview]:
        return self._validate(data, "spec-review", SpecReview, status_code)
