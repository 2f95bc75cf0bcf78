"""Meal photo estimation via a vision LLM."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from macro_tracker.domain.errors import AIProviderError, ProviderErrorCode
from macro_tracker.domain.vision import MealEstimate

_logger = logging.getLogger(__name__)

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "fiber": _NULLABLE_NUMBER,
        "description": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["name", "calories", "protein", "carbs", "fat", "fiber", "description"],
    "additionalProperties": False,
}

ESTIMATE_PROMPT = (
    "Identify the meal in the image and estimate its total nutrition. "
    "Return a short name, calories (kcal), protein, carbs, fat and fiber in grams, "
    "and a one-sentence description."
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class VisionService:
    """Service that prepares vision prompts and validates results."""

    client: VisionClient | None
    model: str
    store: bool = False

    async def estimate(self, image_bytes: bytes) -> MealEstimate:
        """Estimate macros for a meal photo."""
        if self.client is None:
            raise AIProviderError(
                ProviderErrorCode.NO_API_KEY,
                "Add an OpenAI API key to analyze meal photos.",
                status=400,
            )
        try:
            raw = await self.client.extract(
                model=self.model,
                store=self.store,
                image_data_url=_to_data_url(image_bytes),
                schema=ESTIMATE_SCHEMA,
                prompt=ESTIMATE_PROMPT,
            )
        except Exception as exc:
            error = categorize_provider_error(exc)
            _logger.warning("Vision estimate failed: code=%s %s", error.code, exc)
            raise error from exc
        try:
            return MealEstimate.model_validate(raw)
        except ValidationError as exc:
            raise AIProviderError(
                ProviderErrorCode.UNKNOWN,
                "Failed to parse food analysis response.",
                status=500,
            ) from exc


def categorize_provider_error(exc: Exception) -> AIProviderError:
    """Map an upstream exception to the provider error taxonomy."""
    if isinstance(exc, AIProviderError):
        return exc
    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    code = getattr(exc, "code", None)
    message = str(exc)
    if status == 401:  # noqa: PLR2004
        return AIProviderError(
            ProviderErrorCode.INVALID_KEY,
            "Your API key is invalid or has been revoked. Please update it.",
            status=401,
        )
    if status == 429 and code != "insufficient_quota":  # noqa: PLR2004
        return AIProviderError(
            ProviderErrorCode.RATE_LIMIT,
            "Rate limit exceeded. Please wait a moment and try again.",
            status=429,
        )
    if code == "insufficient_quota":
        return AIProviderError(
            ProviderErrorCode.QUOTA_EXCEEDED,
            "Your OpenAI account has run out of credits.",
            status=402,
        )
    lowered = message.lower()
    if "network" in lowered or "econnrefused" in lowered or "connection" in lowered:
        return AIProviderError(
            ProviderErrorCode.NETWORK_ERROR,
            "Unable to connect to the AI provider.",
            status=503,
        )
    return AIProviderError(
        ProviderErrorCode.UNKNOWN,
        message or "An unexpected error occurred with the AI provider.",
        status=500,
    )


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
