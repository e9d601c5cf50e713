"""Input size bounds applied before any text reaches the generator."""

import logging
from dataclasses import dataclass

from specforge.errors.exceptions import InvalidRequestError
from specforge.results import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardedInput:
    text: str
    truncated: bool = False


def guard_input(
    text: str,
    *,
    min_length: int,
    max_length: int,
    too_short_message: str | None = None,
) -> Result[GuardedInput]:
    """Reject text under ``min_length``; prefix-cut text over ``max_length``.

    Lengths are counted in code points, the same unit the cut uses, so a
    truncated result is exactly ``max_length`` characters long and never
    splits a multi-byte character.
    """
    if len(text) < min_length:
        message = too_short_message or f"Requirements too short (min {min_length} characters)."
        return Err(InvalidRequestError(message, {"min_length": min_length, "length": len(text)}))

    if len(text) > max_length:
        logger.info("input_truncated", extra={"length": len(text), "max_length": max_length})
        return Ok(GuardedInput(text=text[:max_length], truncated=True))

    return Ok(GuardedInput(text=text))
