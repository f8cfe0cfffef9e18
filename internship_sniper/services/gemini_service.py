"""Gemini vision client: one generate_content call over an instruction plus page images."""

from typing import Optional, Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from internship_sniper.errors import RateLimitedError, TransportError
from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)

_RATE_LIMIT_MARKERS = ("429", "quota", "RESOURCE_EXHAUSTED")


def is_rate_limit_error(error: BaseException) -> bool:
    """Rate-limit class errors: HTTP 429 code or a quota / RESOURCE_EXHAUSTED message."""
    if getattr(error, "code", None) == 429:
        return True
    message = str(error)
    return any(marker in message for marker in _RATE_LIMIT_MARKERS)


class GeminiVisionClient:
    """Thin async wrapper over google-genai that maps failures onto the pipeline taxonomy."""

    def __init__(self, api_key: str, timeout_seconds: Optional[float] = None) -> None:
        http_options = None
        if timeout_seconds:
            http_options = genai_types.HttpOptions(timeout=int(timeout_seconds * 1000))
        self._client = genai.Client(api_key=api_key, http_options=http_options)

    async def generate(self, model: str, prompt: str, pages: Sequence) -> str:
        """Send prompt + ordered page images; return the model's raw text."""
        contents = [prompt]
        for page in pages:
            contents.append(genai_types.Part.from_bytes(data=page.data, mime_type=page.media_type))
        try:
            response = await self._client.aio.models.generate_content(model=model, contents=contents)
        except genai_errors.APIError as e:
            if is_rate_limit_error(e):
                raise RateLimitedError(f"{model} rate limited: {e}") from e
            raise TransportError(f"{model} API error: {e}") from e
        except Exception as e:
            if is_rate_limit_error(e):
                raise RateLimitedError(f"{model} rate limited: {e}") from e
            raise TransportError(f"{model} request failed: {e}") from e
        return response.text or ""

    async def aclose(self) -> None:
        """Release the SDK's async HTTP session."""
        await self._client.aio.aclose()
