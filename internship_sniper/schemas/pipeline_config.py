"""Process-wide, read-only pipeline configuration (credentials, timeouts, caps)."""

import re
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from internship_sniper.config import (
    DO_BASE_URL,
    DO_MAX_INPUT_CHARS,
    DO_MAX_TOKENS,
    DO_MODEL,
    DO_TIMEOUT_SECONDS,
    MAX_RASTER_PAGES,
    MIN_TEXT_CHARS,
    NVIDIA_CHAT_URL,
    NVIDIA_MAX_INPUT_CHARS,
    NVIDIA_MAX_TOKENS,
    NVIDIA_MODEL,
    NVIDIA_TIMEOUT_SECONDS,
    NVIDIA_TOP_P,
    OCR_LANGUAGE,
    RASTER_JPEG_QUALITY,
    RASTER_SCALE,
    RATE_LIMIT_BACKOFF_SECONDS,
    TEXT_TEMPERATURE,
    VISION_ATTEMPTS_PER_MODEL,
    VISION_MODELS,
)

# Template values copied from .env.example (e.g. "your_gemini_api_key_here")
_PLACEHOLDER_KEY = re.compile(r"your_.*api_key", re.IGNORECASE)


def credential_present(api_key: Optional[str]) -> bool:
    key = (api_key or "").strip()
    return bool(key) and not _PLACEHOLDER_KEY.search(key)


class VisionTierSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", repr=False)
    models: Tuple[str, ...] = Field(default=VISION_MODELS, description="Primary first, then fallbacks")
    attempts_per_model: int = Field(default=VISION_ATTEMPTS_PER_MODEL, ge=1)
    rate_limit_backoff_seconds: float = Field(default=RATE_LIMIT_BACKOFF_SECONDS, ge=0)
    timeout_seconds: Optional[float] = Field(default=None, description="None = provider default")
    max_pages: int = Field(default=MAX_RASTER_PAGES, ge=1)
    raster_scale: float = Field(default=RASTER_SCALE, gt=0)
    jpeg_quality: int = Field(default=RASTER_JPEG_QUALITY, ge=1, le=95)
    require_name: bool = False

    @property
    def is_configured(self) -> bool:
        return credential_present(self.api_key) and bool(self.models)


class TextTierSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", repr=False)
    endpoint: str = Field(..., description="Base URL (SDK client) or full chat-completions URL")
    model: str
    timeout_seconds: float = Field(..., gt=0)
    max_input_chars: int = Field(..., ge=1)
    max_tokens: int = Field(..., ge=1)
    temperature: float = TEXT_TEMPERATURE
    top_p: Optional[float] = None
    require_name: bool = Field(default=True, description="Reject parsed objects without a name")

    @property
    def is_configured(self) -> bool:
        return credential_present(self.api_key)


def _default_text_a() -> TextTierSettings:
    return TextTierSettings(
        endpoint=DO_BASE_URL,
        model=DO_MODEL,
        timeout_seconds=DO_TIMEOUT_SECONDS,
        max_input_chars=DO_MAX_INPUT_CHARS,
        max_tokens=DO_MAX_TOKENS,
    )


def _default_text_b() -> TextTierSettings:
    return TextTierSettings(
        endpoint=NVIDIA_CHAT_URL,
        model=NVIDIA_MODEL,
        timeout_seconds=NVIDIA_TIMEOUT_SECONDS,
        max_input_chars=NVIDIA_MAX_INPUT_CHARS,
        max_tokens=NVIDIA_MAX_TOKENS,
        top_p=NVIDIA_TOP_P,
    )


class PipelineConfig(BaseModel):
    """
    Immutable configuration threaded into every pipeline run.
    PipelineConfig() carries no credentials, so only the regex tier runs.
    """

    model_config = ConfigDict(frozen=True)

    vision: VisionTierSettings = Field(default_factory=VisionTierSettings)
    text_a: TextTierSettings = Field(default_factory=_default_text_a)
    text_b: TextTierSettings = Field(default_factory=_default_text_b)
    min_text_chars: int = Field(default=MIN_TEXT_CHARS, ge=0)
    ocr_language: str = OCR_LANGUAGE
