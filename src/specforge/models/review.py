"""Pydantic model for the QA critique artifact (spec-review.schema.json)."""

from pydantic import BaseModel, ConfigDict, Field


class SpecReview(BaseModel):
    """Quality critique of an AppSpec. The score is not clamped."""

    model_config = ConfigDict(extra="forbid")

    score: float = Field(allow_inf_nan=False)
    missing: list[str]
    ambiguities: list[str]
    questions: list[str]

    def to_payload(self) -> dict:
        payload = self.model_dump(mode="json")
        if float(self.score).is_integer():
            payload["score"] = int(self.score)
        return payload
