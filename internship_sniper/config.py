"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_list(name: str, default: tuple) -> tuple:
    raw = os.getenv(name, "")
    values = tuple(item.strip() for item in raw.split(",") if item.strip())
    return values or default


# Runtime environment
APP_ENV: str = os.getenv("APP_ENV", os.getenv("NODE_ENV", "development")).strip().lower()
IS_PRODUCTION: bool = APP_ENV == "production"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING" if IS_PRODUCTION else "INFO").strip().upper()

# API keys – never hardcode
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
DO_API_KEY: str = os.getenv("DO_API_KEY", "")
NVIDIA_API_KEY: str = os.getenv("NVIDIA_API_KEY", "")

# Upload limits
MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

# Vision tier (Gemini)
VISION_MODELS: tuple = _env_list("GEMINI_VISION_MODELS", ("gemini-2.0-flash-lite", "gemini-2.0-flash"))
VISION_ATTEMPTS_PER_MODEL: int = 2
RATE_LIMIT_BACKOFF_SECONDS: float = 5.0
MAX_RASTER_PAGES: int = 3  # bounds token cost and request size
RASTER_SCALE: float = 1.0
RASTER_JPEG_QUALITY: int = 80

# Text tier A (DigitalOcean serverless inference, OpenAI-compatible)
DO_BASE_URL: str = "https://inference.do-ai.run/v1"
DO_MODEL: str = os.getenv("DO_MODEL", "alibaba-qwen3-32b")
DO_TIMEOUT_SECONDS: float = 45.0
DO_MAX_INPUT_CHARS: int = 8000
DO_MAX_TOKENS: int = 3000

# Text tier B (NVIDIA integrate API)
NVIDIA_CHAT_URL: str = "https://integrate.api.nvidia.com/v1/chat/completions"
NVIDIA_MODEL: str = os.getenv("NVIDIA_MODEL", "moonshotai/kimi-k2.5")
NVIDIA_TIMEOUT_SECONDS: float = 90.0
NVIDIA_MAX_INPUT_CHARS: int = 10000
NVIDIA_MAX_TOKENS: int = 4000
NVIDIA_TOP_P: float = 1.0

TEXT_TEMPERATURE: float = 0.1
MIN_TEXT_CHARS: int = 10
OCR_LANGUAGE: str = "eng"


def load_pipeline_config():
    """
    Build the immutable PipelineConfig from the values above.
    Called once at process start; the result is passed into the pipeline explicitly.
    """
    from internship_sniper.schemas.pipeline_config import (
        PipelineConfig,
        TextTierSettings,
        VisionTierSettings,
    )

    return PipelineConfig(
        vision=VisionTierSettings(
            api_key=GEMINI_API_KEY,
            models=VISION_MODELS,
            attempts_per_model=VISION_ATTEMPTS_PER_MODEL,
            rate_limit_backoff_seconds=RATE_LIMIT_BACKOFF_SECONDS,
            max_pages=MAX_RASTER_PAGES,
            raster_scale=RASTER_SCALE,
            jpeg_quality=RASTER_JPEG_QUALITY,
        ),
        text_a=TextTierSettings(
            api_key=DO_API_KEY,
            endpoint=DO_BASE_URL,
            model=DO_MODEL,
            timeout_seconds=DO_TIMEOUT_SECONDS,
            max_input_chars=DO_MAX_INPUT_CHARS,
            max_tokens=DO_MAX_TOKENS,
            temperature=TEXT_TEMPERATURE,
        ),
        text_b=TextTierSettings(
            api_key=NVIDIA_API_KEY,
            endpoint=NVIDIA_CHAT_URL,
            model=NVIDIA_MODEL,
            timeout_seconds=NVIDIA_TIMEOUT_SECONDS,
            max_input_chars=NVIDIA_MAX_INPUT_CHARS,
            max_tokens=NVIDIA_MAX_TOKENS,
            temperature=TEXT_TEMPERATURE,
            top_p=NVIDIA_TOP_P,
        ),
        min_text_chars=MIN_TEXT_CHARS,
        ocr_language=OCR_LANGUAGE,
    )
