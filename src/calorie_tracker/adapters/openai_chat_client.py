"""OpenAI Chat Completions client for the advisory services."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from calorie_tracker.domain.errors import UpstreamUnavailableError
from calorie_tracker.services.advisory import ModelClient

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIChatClient(ModelClient):
    """Model client backed by OpenAI chat completions."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIChatClient":
        """Create an OpenAI chat client with a bounded request timeout."""
        http_client = httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, http_client=http_client
            )
        )

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        temperature: float | None,
        max_tokens: int,
    ) -> str:
        """Return the first choice's text, or an empty string."""
        request_payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            request_payload["temperature"] = temperature

        try:
            response = await self.client.chat.completions.create(**request_payload)
        except openai.OpenAIError as exc:
            _logger.warning("OpenAI request failed: %s", type(exc).__name__)
            raise UpstreamUnavailableError(
                f"OpenAI request failed: {type(exc).__name__}"
            ) from exc

        if not response.choices:
            raise UpstreamUnavailableError("OpenAI returned no choices")
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
