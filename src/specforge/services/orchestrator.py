"""Request orchestration for the extraction, review and render operations.

Each operation is a fixed sequence of steps; every fallible step yields a
tagged result that is checked before the next step runs, and the first
failure ends the request. Order per generating request:

    admission -> payload shape -> input bounds -> prompt -> generation
    -> JSON decode -> contract validation -> response

Anything that escapes as a plain exception is reported as an internal error.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from specforge.config import Settings
from specforge.errors.exceptions import SpecForgeError, UnexpectedError
from specforge.models.app_spec import AppSpec
from specforge.prompts.builder import (
    PromptPair,
    build_code_extraction_prompt,
    build_review_prompt,
    build_text_extraction_prompt,
    compose_code_listing,
)
from specforge.results import Err
from specforge.schemas.loader import load_schema
from specforge.schemas.registry import GENERATION_SCHEMA_NAMES
from specforge.services.consistency import check_consistency
from specforge.services.decoder import ContractValidator, decode_json
from specforge.services.generation import GenerationRequest, Generator, invoke_generation
from specforge.services.input_guard import guard_input
from specforge.services.markdown_renderer import render_app_spec, render_review, render_summary
from specforge.services.payloads import (
    decode_body,
    parse_files_payload,
    parse_review_payload,
    parse_text_payload,
)
from specforge.services.rate_limiter import AdmissionController, AdmissionDecision

logger = logging.getLogger(__name__)

CODE_TOO_SHORT_MESSAGE = (
    "Total code length too short (min {min_length} characters). "
    "Add more files or ensure content is read as text."
)


@dataclass
class PipelineResponse:
    body: dict[str, Any]
    remaining: int | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.remaining is not None:
            self.headers.setdefault("X-RateLimit-Remaining", str(self.remaining))


class SpecPipeline:
    """Stateless per-request orchestrator over shared, injected collaborators."""

    def __init__(
        self,
        settings: Settings,
        rate_limiter: AdmissionController,
        generator: Generator,
        validator: ContractValidator,
    ):
        self.settings = settings
        self.rate_limiter = rate_limiter
        self.generator = generator
        self.validator = validator

    # -- public operations -------------------------------------------------

    async def extract_from_text(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        return await self._guarded(self._extract_from_text, client_key, raw_body)

    async def extract_from_code(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        return await self._guarded(self._extract_from_code, client_key, raw_body)

    async def review(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        return await self._guarded(self._review, client_key, raw_body)

    async def render(self, raw_body: bytes) -> PipelineResponse:
        return await self._guarded(self._render, raw_body)

    # -- steps -------------------------------------------------------------

    async def _guarded(self, operation: Callable[..., Awaitable[PipelineResponse]], *args) -> PipelineResponse:
        try:
            return await operation(*args)
        except SpecForgeError:
            raise
        except Exception as exc:
            logger.exception("pipeline_unexpected_failure")
            raise UnexpectedError(str(exc)) from exc

    def _admit(self, client_key: str) -> AdmissionDecision:
        admission = self.rate_limiter.admit(client_key)
        if isinstance(admission, Err):
            raise admission.error
        return admission.value

    async def _extract_from_text(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        decision = self._admit(client_key)

        body = decode_body(raw_body)
        if isinstance(body, Err):
            raise body.error
        text = parse_text_payload(body.value)
        if isinstance(text, Err):
            raise text.error

        guarded = guard_input(
            text.value,
            min_length=self.settings.min_input_length,
            max_length=self.settings.max_input_length,
        )
        if isinstance(guarded, Err):
            raise guarded.error

        prompt = build_text_extraction_prompt(guarded.value.text)
        return await self._generate_app_spec(prompt, guarded.value.truncated, decision)

    async def _extract_from_code(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        decision = self._admit(client_key)

        body = decode_body(raw_body)
        if isinstance(body, Err):
            raise body.error
        files = parse_files_payload(body.value)
        if isinstance(files, Err):
            raise files.error

        listing = compose_code_listing(files.value)
        guarded = guard_input(
            listing,
            min_length=self.settings.min_input_length,
            max_length=self.settings.max_input_length,
            too_short_message=CODE_TOO_SHORT_MESSAGE.format(min_length=self.settings.min_input_length),
        )
        if isinstance(guarded, Err):
            raise guarded.error

        prompt = build_code_extraction_prompt(guarded.value.text)
        return await self._generate_app_spec(prompt, guarded.value.truncated, decision)

    async def _review(self, client_key: str, raw_body: bytes) -> PipelineResponse:
        decision = self._admit(client_key)

        body = decode_body(raw_body)
        if isinstance(body, Err):
            raise body.error
        payload = parse_review_payload(body.value)
        if isinstance(payload, Err):
            raise payload.error

        guarded = guard_input(
            payload.value.text,
            min_length=self.settings.min_input_length,
            max_length=self.settings.max_input_length,
        )
        if isinstance(guarded, Err):
            raise guarded.error

        prompt = build_review_prompt(guarded.value.text, payload.value.app_spec)
        raw = await self._generate(prompt, "spec-review")
        data = decode_json(raw)
        if isinstance(data, Err):
            raise data.error
        review = self.validator.validate_spec_review(data.value)
        if isinstance(review, Err):
            raise review.error

        result = review.value.to_payload()
        if guarded.value.truncated:
            result["truncated"] = True
        return PipelineResponse(body=result, remaining=decision.remaining)

    async def _render(self, raw_body: bytes) -> PipelineResponse:
        body = decode_body(raw_body)
        if isinstance(body, Err):
            raise body.error

        candidate = body.value.get("appSpec")
        spec = self.validator.validate_app_spec(candidate, status_code=400)
        if isinstance(spec, Err):
            raise spec.error

        markdown = render_app_spec(spec.value)
        if body.value.get("review") is not None:
            review = self.validator.validate_spec_review(body.value["review"], status_code=400)
            if isinstance(review, Err):
                raise review.error
            markdown += "\n" + render_review(review.value)

        return PipelineResponse(body={"summary": render_summary(spec.value), "markdown": markdown})

    # -- shared tail -------------------------------------------------------

    async def _generate(self, prompt: PromptPair, schema_name: str) -> str:
        request = GenerationRequest(
            prompt=prompt,
            schema_name=GENERATION_SCHEMA_NAMES[schema_name],
            schema=load_schema(schema_name),
        )
        raw = await invoke_generation(self.generator, request, timeout=self.settings.generation_timeout_seconds)
        if isinstance(raw, Err):
            raise raw.error
        return raw.value

    async def _generate_app_spec(
        self, prompt: PromptPair, truncated: bool, decision: AdmissionDecision
    ) -> PipelineResponse:
        raw = await self._generate(prompt, "app-spec")
        data = decode_json(raw)
        if isinstance(data, Err):
            raise data.error
        spec = self.validator.validate_app_spec(data.value)
        if isinstance(spec, Err):
            raise spec.error

        result: dict[str, Any] = {"appSpec": spec.value.to_payload()}
        if truncated:
            result["truncated"] = True
        warnings = self._consistency_warnings(spec.value)
        if warnings:
            result["warnings"] = warnings
        return PipelineResponse(body=result, remaining=decision.remaining)

    def _consistency_warnings(self, spec: AppSpec) -> list[str]:
        if not self.settings.consistency_checks_enabled:
            return []
        warnings = check_consistency(spec)
        if warnings:
            logger.info("app_spec_consistency_warnings", extra={"warnings": warnings})
        return warnings
