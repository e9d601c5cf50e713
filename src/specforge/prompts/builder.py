"""Pure prompt construction for text-to-spec, code-to-spec and QA review.

Every builder is deterministic: identical inputs always yield identical
prompt text, so prompts can be snapshot-tested.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from specforge.models.payloads import SourceFile
from specforge.prompts.templates import (
    CODE_EXTRACTION_SYSTEM,
    CODE_EXTRACTION_USER_PREFIX,
    EXTRACTION_SYSTEM,
    EXTRACTION_USER_PREFIX,
    QA_SYSTEM,
    QA_USER_PREFIX,
    QA_USER_SUFFIX,
)

FILE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


def build_text_extraction_prompt(requirements: str) -> PromptPair:
    return PromptPair(system=EXTRACTION_SYSTEM, user=EXTRACTION_USER_PREFIX + requirements)


def render_file_block(source: SourceFile) -> str:
    return f"--- {source.path} ---\n{source.content}"


def compose_code_listing(files: Iterable[SourceFile]) -> str:
    """Render files as labeled blocks preceded by the code-analysis framing.

    The size guard is applied to this composed text as a whole, so callers
    build it before checking input bounds.
    """
    blocks = [render_file_block(f) for f in files]
    return CODE_EXTRACTION_USER_PREFIX + FILE_SEPARATOR.join(blocks)


def build_code_extraction_prompt(listing: str) -> PromptPair:
    """Wrap an already composed (and possibly truncated) code listing."""
    return PromptPair(system=CODE_EXTRACTION_SYSTEM, user=listing)


def serialize_app_spec(app_spec: Mapping[str, Any]) -> str:
    """Compact JSON serialization used to embed a spec in the review prompt."""
    return json.dumps(app_spec, separators=(",", ":"), ensure_ascii=False)


def build_review_prompt(requirements: str, app_spec: Mapping[str, Any] | None = None) -> PromptPair:
    user = f"{QA_USER_PREFIX} requirements and spec.\n\nRequirements:\n{requirements}"
    if app_spec is not None:
        user += f"\n\nCurrent AppSpec (JSON):\n{serialize_app_spec(app_spec)}"
    user += f"\n\n{QA_USER_SUFFIX}"
    return PromptPair(system=QA_SYSTEM, user=user)
