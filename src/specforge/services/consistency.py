"""Cross-reference checks run after an AppSpec passes structural validation.

These never reject a spec. Generators occasionally slip on references
between sections; the findings are reported as warnings next to the spec.
"""

from collections import Counter

from specforge.models.app_spec import AppSpec


def _duplicates(values: list[str]) -> list[str]:
    return sorted(name for name, count in Counter(values).items() if count > 1)


def check_consistency(spec: AppSpec) -> list[str]:
    """Return human-readable warnings, in document order."""
    warnings: list[str] = []
    entity_names = set(spec.entity_names())
    role_names = set(spec.roles)

    if not spec.app_name.strip():
        warnings.append("app_name is empty")

    for name in _duplicates(spec.entity_names()):
        warnings.append(f"entity '{name}' is declared more than once")

    for i, entity in enumerate(spec.entities):
        if not entity.fields:
            warnings.append(f"entities.{i}: entity '{entity.name}' has no fields")
        if entity.primary_key not in entity.field_names():
            warnings.append(
                f"entities.{i}.primary_key: '{entity.primary_key}' is not a field of '{entity.name}'"
            )

    for i, rel in enumerate(spec.relationships):
        for side in ("from_entity", "to_entity"):
            target = getattr(rel, side)
            if target not in entity_names:
                warnings.append(f"relationships.{i}.{side}: unknown entity '{target}'")

    for role in _duplicates(spec.roles):
        warnings.append(f"role '{role}' is listed more than once")

    for i, perm in enumerate(spec.permissions):
        if perm.entity not in entity_names:
            warnings.append(f"permissions.{i}.entity: unknown entity '{perm.entity}'")
        if perm.role not in role_names:
            warnings.append(f"permissions.{i}.role: role '{perm.role}' is not in roles")

    for i, workflow in enumerate(spec.workflows):
        for j, step in enumerate(workflow.steps):
            if step.entity is not None and step.entity not in entity_names:
                warnings.append(f"workflows.{i}.steps.{j}.entity: unknown entity '{step.entity}'")

    return warnings
