"""LLM service for Anthropic Claude integration."""

import json
import logging
from typing import Any

import anthropic

from src.config import get_settings

logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code block wrapped around a model response."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


class LLMService:
    """Service for interacting with the Anthropic messages API."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.model = self.settings.llm_model
        self.max_tokens = self.settings.llm_max_tokens
        self.timeout = 120.0  # 2 minutes for LLM responses
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.timeout,
            )
        return self._client

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response from the LLM."""
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        message = await self.client.messages.create(**kwargs)
        return "".join(block.text for block in message.content if block.type == "text")

    async def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.7,
    ) -> Any:
        """Generate structured JSON response from the LLM."""
        result = None
        try:
            result = await self.generate(
                prompt=prompt,
                system_prompt=system_prompt,
                temperature=temperature,
            )
            return json.loads(strip_code_fences(result))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse LLM response as JSON: {e}")
            logger.warning(f"Raw response: {result if result is not None else 'N/A'}")
            raise
        except anthropic.APIError as e:
            logger.error(f"Error calling Anthropic API: {e}")
            raise
