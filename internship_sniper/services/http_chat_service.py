"""Raw httpx client for OpenAI-compatible chat-completions endpoints (NVIDIA integrate)."""

from typing import Any, Dict, List, Optional

import httpx

from internship_sniper.errors import RateLimitedError, TransportError
from internship_sniper.utils.logger import get_logger, preview

logger = get_logger(__name__)


class HttpChatClient:
    """
    POSTs {model, messages, max_tokens, temperature[, top_p]} with bearer auth and
    reads choices[0].message.content from the response.
    """

    def __init__(
        self,
        api_key: str,
        chat_url: str,
        timeout_seconds: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._chat_url = chat_url
        self._timeout = timeout_seconds
        self._transport = transport

    async def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: float,
        top_p: Optional[float] = None,
    ) -> str:
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if top_p is not None:
            payload["top_p"] = top_p
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._chat_url, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("%s HTTP error %s: %s", model, status, preview(e.response.text))
            if status == 429:
                raise RateLimitedError(f"{model} rate limited (HTTP 429)") from e
            raise TransportError(f"{model} HTTP error {status}") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"{model} timed out after {self._timeout}s") from e
        except (httpx.RequestError, ValueError) as e:
            raise TransportError(f"{model} request failed: {e}") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            return ""
        message = (choices[0] or {}).get("message") or {}
        return message.get("content") or ""

    async def aclose(self) -> None:
        """Nothing to release: each request opens and closes its own AsyncClient."""
