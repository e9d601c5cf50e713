"""Request body parsing for the extraction and review endpoints.

Payload shape is checked before any generation call is made, so malformed
requests never cost a model invocation.
"""

import json
import logging
from typing import Any

from specforge.errors.exceptions import InvalidRequestError
from specforge.models.payloads import ReviewRequest, SourceFile
from specforge.results import Err, Ok, Result

logger = logging.getLogger(__name__)

MISSING_TEXT_MESSAGE = "Please provide requirements text (field: text)."
MISSING_FILES_MESSAGE = "Please provide an array of files (each with path and content)."
MALFORMED_FILES_MESSAGE = "Each file must have path and content (string)."


def decode_body(raw: bytes) -> Result[dict[str, Any]]:
    """Decode a request body that must be a JSON object."""
    try:
        body = json.loads(raw or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return Err(InvalidRequestError("Request body must be valid JSON."))
    if not isinstance(body, dict):
        return Err(InvalidRequestError("Request body must be a JSON object."))
    return Ok(body)


def _extract_text(body: dict[str, Any]) -> Result[str]:
    text = body.get("text")
    text = text.strip() if isinstance(text, str) else ""
    if not text:
        return Err(InvalidRequestError(MISSING_TEXT_MESSAGE))
    return Ok(text)


def parse_text_payload(body: dict[str, Any]) -> Result[str]:
    return _extract_text(body)


def parse_files_payload(body: dict[str, Any]) -> Result[list[SourceFile]]:
    """Collect usable ``{path, content}`` entries; entries missing either key are skipped."""
    files = body.get("files")
    if not isinstance(files, list) or not files:
        return Err(InvalidRequestError(MISSING_FILES_MESSAGE))

    normalized: list[SourceFile] = []
    for entry in files:
        if not isinstance(entry, dict) or "path" not in entry or "content" not in entry:
            continue
        normalized.append(SourceFile(path=str(entry["path"]), content=str(entry["content"])))

    skipped = len(files) - len(normalized)
    if skipped:
        logger.info("files_skipped", extra={"skipped": skipped, "accepted": len(normalized)})
    if not normalized:
        return Err(InvalidRequestError(MALFORMED_FILES_MESSAGE))
    return Ok(normalized)


def parse_review_payload(body: dict[str, Any]) -> Result[ReviewRequest]:
    text = _extract_text(body)
    if isinstance(text, Err):
        return text

    app_spec = body.get("appSpec")
    if app_spec is not None and not isinstance(app_spec, dict):
        return Err(InvalidRequestError("appSpec must be a JSON object when provided."))
    return Ok(ReviewRequest(text=text.value, app_spec=app_spec))
