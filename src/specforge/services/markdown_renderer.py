"""Markdown rendering service for AppSpec and SpecReview artifacts.

Renders a one-glance plain summary (the "copy summary" text) and a full
markdown document suitable for pasting into tickets or builder tools.
"""

from __future__ import annotations

from specforge.models.app_spec import AppSpec
from specforge.models.review import SpecReview


def render_summary(spec: AppSpec) -> str:
    """Render a short plain-text overview of a spec."""
    parts: list[str] = [f"App: {spec.app_name}"]
    parts.append(f"\nEntities ({len(spec.entities)}): {', '.join(spec.entity_names())}")
    parts.append(f"\nRelationships: {len(spec.relationships)}")
    parts.append(f"\nRoles: {', '.join(spec.roles)}")
    parts.append(f"\nWorkflows: {', '.join(w.name for w in spec.workflows)}")
    if spec.assumptions:
        parts.append(f"\nAssumptions: {'; '.join(spec.assumptions)}")
    return "".join(parts)


def _flag(value: bool | None) -> str:
    if value is None:
        return ""
    return "yes" if value else "no"


def render_app_spec(spec: AppSpec) -> str:
    """Render a full AppSpec as markdown."""
    lines: list[str] = []
    lines.append(f"# {spec.app_name or 'Untitled app'}")
    lines.append("")

    lines.append("## Entities")
    lines.append("")
    if not spec.entities:
        lines.append("_None._")
        lines.append("")
    for entity in spec.entities:
        lines.append(f"### {entity.name}")
        lines.append("")
        lines.append(f"Primary key: `{entity.primary_key}`")
        lines.append("")
        lines.append("| Field | Type | Required | Unique | Description |")
        lines.append("|-------|------|----------|--------|-------------|")
        for f in entity.fields:
            lines.append(
                f"| {f.name} | {f.type} | {_flag(f.required)} | {_flag(f.unique)} | {f.description or ''} |"
            )
        lines.append("")

    if spec.relationships:
        lines.append("## Relationships")
        lines.append("")
        for rel in spec.relationships:
            fk = f" via `{rel.foreign_key}`" if rel.foreign_key else ""
            lines.append(f"- {rel.from_entity} → {rel.to_entity} ({rel.type}){fk}")
        lines.append("")

    if spec.roles or spec.permissions:
        lines.append("## Roles and Permissions")
        lines.append("")
        if spec.roles:
            lines.append(f"Roles: {', '.join(spec.roles)}")
            lines.append("")
        if spec.permissions:
            lines.append("| Role | Entity | Actions |")
            lines.append("|------|--------|---------|")
            for perm in spec.permissions:
                lines.append(f"| {perm.role} | {perm.entity} | {', '.join(perm.actions)} |")
            lines.append("")

    if spec.workflows:
        lines.append("## Workflows")
        lines.append("")
        for workflow in spec.workflows:
            lines.append(f"### {workflow.name}")
            lines.append("")
            lines.append(f"Trigger: {workflow.trigger}")
            lines.append("")
            for n, step in enumerate(workflow.steps, start=1):
                target = f" ({step.entity})" if step.entity else ""
                lines.append(f"{n}. {step.action}{target}")
                for condition in step.conditions or []:
                    lines.append(f"   - if {condition}")
            lines.append("")

    if spec.ui_suggestions:
        lines.append("## UI Suggestions")
        lines.append("")
        for ui in spec.ui_suggestions:
            prefix = f"**{ui.screen}**: " if ui.screen else ""
            lines.append(f"- {prefix}{ui.description}")
            if ui.components:
                lines.append(f"  - Components: {', '.join(ui.components)}")
        lines.append("")

    if spec.assumptions:
        lines.append("## Assumptions")
        lines.append("")
        for assumption in spec.assumptions:
            lines.append(f"- {assumption}")
        lines.append("")

    return "\n".join(lines)


def render_review(review: SpecReview) -> str:
    """Render a QA review as markdown."""
    lines: list[str] = ["## Spec Review", "", f"**Score:** {review.score:g}/100", ""]
    for title, items in (
        ("Missing", review.missing),
        ("Ambiguities", review.ambiguities),
        ("Clarifying Questions", review.questions),
    ):
        lines.append(f"### {title}")
        lines.append("")
        if items:
            lines.extend(f"- {item}" for item in items)
        else:
            lines.append("_None._")
        lines.append("")
    return "\n".join(lines)
