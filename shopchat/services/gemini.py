import json
import re
from dataclasses import dataclass

import google.generativeai as genai
from pydantic import ValidationError

from shopchat.logger import get_logger
from shopchat.models.schemas import AIRecommendation

logger = get_logger("gemini")

_FENCE_JSON = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")

# Override the SDK defaults (retry on 503/429, 600s deadline) for every call.
REQUEST_OPTIONS = {"retry": None, "timeout": None}


class GeminiClient:
    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        # An empty key is not rejected here; the first call fails instead.
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    async def generate(self, prompt: str) -> str:
        """Send one prompt and return the reply text. No timeout, no retry."""
        response = await self._model.generate_content_async(prompt, request_options=REQUEST_OPTIONS)
        return response.text.strip()


@dataclass
class ParsedReply:
    """Outcome of reading a model reply: either a recommendation or the raw text."""
    raw: str
    recommendation: AIRecommendation | None = None

    @property
    def ok(self) -> bool:
        return self.recommendation is not None

    @property
    def product_ids(self) -> list[int]:
        return self.recommendation.product_ids if self.recommendation else []

    @property
    def message(self) -> str:
        return self.recommendation.message if self.recommendation else self.raw


def strip_code_fences(text: str) -> str:
    text = _FENCE_JSON.sub("", text)
    return _FENCE.sub("", text).strip()


def parse_reply(text: str) -> ParsedReply:
    """Read a reply as {"productIds": [...], "message": "..."}.

    Anything else, invalid JSON included, comes back with no recommendation
    and the cleaned reply text as the message.
    """
    cleaned = strip_code_fences(text)
    try:
        recommendation = AIRecommendation.model_validate(json.loads(cleaned))
    except (ValueError, ValidationError):
        logger.warning(f"Failed to parse AI response: {cleaned}")
        return ParsedReply(raw=cleaned)
    return ParsedReply(raw=cleaned, recommendation=recommendation)
