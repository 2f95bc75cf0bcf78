"""OpenAI Responses API client for meal photo estimation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from macro_tracker.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client that asks for a strict JSON meal estimate."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, timeout_seconds: float = 60.0, max_retries: int = 2
    ) -> "OpenAIVisionClient":
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, max_retries=max_retries
            )
        )

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Send the photo with the prompt and decode the structured reply."""
        message = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
        }
        response_format = {
            "type": "json_schema",
            "name": "meal_estimate",
            "strict": True,
            "schema": schema,
        }
        response = await self.client.responses.create(
            model=model,
            input=[message],
            text={"format": response_format},
            store=store,
        )
        if response.status == "incomplete":
            reason = getattr(response.incomplete_details, "reason", None)
            raise RuntimeError(f"Meal estimate was cut short: {reason}")
        if not response.output_text:
            raise RuntimeError("No response from AI")
        return json.loads(response.output_text)

    async def close(self) -> None:
        await self.client.close()
