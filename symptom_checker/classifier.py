from typing import Optional, Protocol
import json, logging, re

import google.generativeai as genai
from pydantic import ValidationError

from .schemas import CategoryResponse

logger = logging.getLogger(__name__)


class ClassificationError(Exception):
    """The external classifier could not produce a usable response."""


class ExternalClassifier(Protocol):
    name: str

    async def classify(self, prompt: str) -> CategoryResponse:
        ...


def parse_response(text: str) -> CategoryResponse:
    """Pull the first JSON object out of a model reply and validate its shape."""
    match = re.search(r"\{[\s\S]*\}", text or "")
    if not match:
        raise ClassificationError("No JSON object in model response")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ClassificationError(f"Invalid JSON in model response: {e}") from e
    try:
        return CategoryResponse.model_validate(data)
    except ValidationError as e:
        raise ClassificationError(f"Model response does not match schema: {e}") from e


# -----------------------------
# GEMINI
# -----------------------------
class GeminiClassifier:
    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.3,
        max_output_tokens: int = 2000,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.model = None
        if api_key:
            # the SDK only takes credentials process-wide; set once when the app is built
            genai.configure(api_key=api_key)
            self.model = genai.GenerativeModel(
                model_name=model_name,
                generation_config={
                    "temperature": temperature,
                    "max_output_tokens": max_output_tokens,
                },
            )
        else:
            logger.warning("GOOGLE_API_KEY is not set; Gemini classification will be unavailable")

    async def classify(self, prompt: str) -> CategoryResponse:
        if self.model is None:
            raise ClassificationError("Missing GOOGLE_API_KEY environment variable.")
        try:
            response = await self.model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            raise ClassificationError(f"Gemini request failed: {e}") from e
        return parse_response(text)
