"""JSON Schema loading and strict-mode helpers for the AppSpec contract."""

import copy
import json
from functools import lru_cache
from pathlib import Path

from specforge.schemas.registry import SCHEMA_REGISTRY

DEFINITIONS_DIR = Path(__file__).resolve().parent / "definitions"


def load_json(path: Path) -> dict:
    """Load a JSON file and return parsed dict."""
    return json.loads(path.read_text(encoding="utf-8"))


@lru_cache(maxsize=8)
def _load_cached(schema_rel: str) -> dict:
    return load_json(DEFINITIONS_DIR / schema_rel)


def load_schema(schema_name: str) -> dict:
    """Return a private copy of a registered schema.

    Raises:
        KeyError: If schema_name is not in SCHEMA_REGISTRY.
    """
    return copy.deepcopy(_load_cached(SCHEMA_REGISTRY[schema_name]))


def _admits_null(prop: dict) -> bool:
    kind = prop.get("type")
    if isinstance(kind, list):
        return "null" in kind
    return kind == "null"


def strictness_violations(schema: dict, path: str = "$") -> list[str]:
    """List every place where a schema breaks strict structured-output rules.

    Every object must enumerate its properties, require all of them and
    forbid additional keys. Optional values are expressed as nullable types.
    """
    problems: list[str] = []
    kind = schema.get("type")
    kinds = kind if isinstance(kind, list) else [kind]

    if "object" in kinds:
        props = schema.get("properties")
        if not isinstance(props, dict):
            problems.append(f"{path}: object without properties")
            props = {}
        if schema.get("additionalProperties") is not False:
            problems.append(f"{path}: additionalProperties must be false")
        missing = sorted(set(props) - set(schema.get("required", [])))
        for key in missing:
            problems.append(f"{path}.{key}: property is not required")
        for key, sub in props.items():
            problems.extend(strictness_violations(sub, f"{path}.{key}"))

    if "array" in kinds:
        items = schema.get("items")
        if not isinstance(items, dict):
            problems.append(f"{path}: array without items")
        else:
            problems.extend(strictness_violations(items, f"{path}[]"))

    return problems


def is_strict_schema(schema: dict) -> bool:
    return not strictness_violations(schema)


def validation_view(schema: dict) -> dict:
    """Derive the post-hoc validation schema from a strict generation schema.

    Nullable properties stay typed but are no longer required, so a
    candidate may either omit them or send an explicit null.
    """
    view = copy.deepcopy(schema)

    def _relax(node: dict) -> None:
        props = node.get("properties")
        if isinstance(props, dict):
            if "required" in node:
                node["required"] = [
                    key for key in node["required"] if not _admits_null(props.get(key, {}))
                ]
            for sub in props.values():
                _relax(sub)
        items = node.get("items")
        if isinstance(items, dict):
            _relax(items)

    _relax(view)
    return view
