"""Provider client exports."""

from .gemini_service import GeminiVisionClient, is_rate_limit_error
from .http_chat_service import HttpChatClient
from .ocr_service import recognize_text
from .openai_chat_service import OpenAIChatClient

__all__ = [
    "GeminiVisionClient",
    "is_rate_limit_error",
    "OpenAIChatClient",
    "HttpChatClient",
    "recognize_text",
]
