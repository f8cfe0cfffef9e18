"""OpenAI-SDK chat client for OpenAI-compatible inference endpoints (DigitalOcean)."""

from typing import Dict, List, Optional

import openai
from openai import AsyncOpenAI

from internship_sniper.errors import RateLimitedError, TransportError


class OpenAIChatClient:
    """Chat completions through AsyncOpenAI with a custom base_url. SDK retries are off."""

    def __init__(self, api_key: str, base_url: str, timeout_seconds: float) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )

    async def complete(
        self,
        model: str,
        messages: List[Dict[str, str]],
        max_tokens: int,
        temperature: float,
        top_p: Optional[float] = None,
    ) -> str:
        create_kwargs = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if top_p is not None:
            create_kwargs["top_p"] = top_p
        try:
            response = await self._client.chat.completions.create(**create_kwargs)
        except openai.RateLimitError as e:
            raise RateLimitedError(f"{model} rate limited: {e}") from e
        except openai.APIError as e:
            raise TransportError(f"{model} request failed: {e}") from e
        choice = response.choices[0] if response.choices else None
        if not choice or not choice.message or not choice.message.content:
            return ""
        return choice.message.content

    async def aclose(self) -> None:
        await self._client.close()
