"""
Advisory Text Generation

Thin client over the OpenAI chat completions API. Timeouts and retries
belong to the client library; failures surface as GenerationError.
"""

import logging
from typing import Optional, Protocol

from openai import AsyncOpenAI, OpenAIError

from benefitscout.config import settings
from benefitscout.errors import GenerationError


logger = logging.getLogger(__name__)


class AdvisoryGenerator(Protocol):
    """Anything that can turn a prompt into advisory text."""

    async def generate(
        self,
        system_instruction: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        ...


class OpenAIAdvisoryGenerator:
    """AdvisoryGenerator backed by the OpenAI API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self._client = AsyncOpenAI(api_key=self.api_key) if self.api_key else None

    async def generate(
        self,
        system_instruction: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Request a completion.

        Args:
            system_instruction: System message
            prompt: User message
            max_tokens: Max output tokens
            temperature: Sampling temperature

        Returns:
            Generated text ('' if the model returned no content)

        Raises:
            GenerationError: If the client is not configured or the API call fails
        """
        if self._client is None:
            raise GenerationError("Advisory generation is not configured", "OPENAI_API_KEY is not set")

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise GenerationError("Advisory generation failed", str(e)) from e

        if not completion.choices:
            raise GenerationError("Advisory generation failed", "empty completion")

        return completion.choices[0].message.content or ""
