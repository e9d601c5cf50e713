"""Schema registry mapping logical names to definition files."""

# Maps logical schema names to relative paths under schemas/definitions/
SCHEMA_REGISTRY: dict[str, str] = {
    "app-spec": "app-spec.schema.json",
    "spec-review": "spec-review.schema.json",
}

# Name under which each schema is announced to the generation backend
GENERATION_SCHEMA_NAMES: dict[str, str] = {
    "app-spec": "AppSpec",
    "spec-review": "SpecReview",
}
