"""Request payload shapes accepted by the extraction and review endpoints."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourceFile:
    """One file of a codebase submitted for code-to-spec extraction."""

    path: str
    content: str


@dataclass(frozen=True)
class ReviewRequest:
    text: str
    app_spec: dict[str, Any] | None = None
