"""Shared plumbing for services that call the language model."""

from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter, ValidationError

from calorie_tracker.domain.advisory import AdvisoryResult, Err, Ok

T = TypeVar("T")

_FENCE = "```"
_JSON_FENCE = "```json"


class ModelClient(Protocol):
    """Interface for chat-completion style model calls."""

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        temperature: float | None,
        max_tokens: int,
    ) -> str:
        """Return the text of the first choice; raise UpstreamUnavailableError."""


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence such as ```json ... ```."""
    cleaned = text.strip()
    if cleaned.startswith(_JSON_FENCE):
        cleaned = cleaned[len(_JSON_FENCE) :]
    elif cleaned.startswith(_FENCE):
        cleaned = cleaned[len(_FENCE) :]
    if cleaned.endswith(_FENCE):
        cleaned = cleaned[: -len(_FENCE)]
    return cleaned.strip()


def decode_model_json(text: str, schema: type[T] | Any) -> AdvisoryResult[T]:
    """Validate a model reply against a schema without raising."""
    payload = strip_code_fences(text)
    if not payload:
        return Err("Model returned an empty reply")
    try:
        value = TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        return Err(f"Unexpected model reply format ({exc.error_count()} errors)")
    return Ok(value)
