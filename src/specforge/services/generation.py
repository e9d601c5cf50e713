"""Generation backend adapter and invoker.

The backend is treated as untrusted: it returns text that may be empty or
malformed even under a strict response schema. A single attempt is made per
request; retry decisions belong to the caller.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import openai
from openai import AsyncOpenAI

from specforge.errors.exceptions import UpstreamEmptyError, UpstreamTimeoutError
from specforge.prompts.builder import PromptPair
from specforge.results import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """A prompt pair plus the strict schema the output must follow."""

    prompt: PromptPair
    schema_name: str
    schema: dict[str, Any] = field(repr=False)


class Generator(Protocol):
    async def complete(self, request: GenerationRequest) -> str | None: ...


class OpenAIGenerator:
    """Chat-completions backend constrained by a strict json_schema response format."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 60.0,
    ):
        self.model = model
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._client: AsyncOpenAI | None = None

    @classmethod
    def from_settings(cls, settings) -> "OpenAIGenerator":
        return cls(
            model=settings.generation_model,
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.generation_timeout_seconds,
        )

    @property
    def client(self) -> AsyncOpenAI:
        # Built on first use so the service can start without credentials.
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=openai.Timeout(self.timeout, connect=10.0),
                max_retries=0,
            )
        return self._client

    async def complete(self, request: GenerationRequest) -> str | None:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": request.prompt.system},
                {"role": "user", "content": request.prompt.user},
            ],
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": request.schema_name,
                    "strict": True,
                    "schema": request.schema,
                },
            },
        )
        if not completion.choices:
            return None
        message = completion.choices[0].message
        if getattr(message, "refusal", None):
            logger.warning("generation_refused", extra={"refusal": message.refusal})
        return message.content

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None


async def invoke_generation(generator: Generator, request: GenerationRequest, timeout: float) -> Result[str]:
    """Run one generation attempt under an explicit deadline."""
    try:
        raw = await asyncio.wait_for(generator.complete(request), timeout=timeout)
    except (asyncio.TimeoutError, openai.APITimeoutError):
        logger.warning("generation_timeout", extra={"schema": request.schema_name, "timeout": timeout})
        return Err(UpstreamTimeoutError(timeout))

    if not raw:
        logger.warning("generation_empty", extra={"schema": request.schema_name})
        return Err(UpstreamEmptyError())
    return Ok(raw)
