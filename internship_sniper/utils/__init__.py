"""Utility exports."""

from .helpers import (
    count_visible_chars,
    first_email,
    first_phone,
    guess_media_type,
    linkedin_url,
    looks_like_pdf,
    normalize_media_type,
)
from .logger import get_logger, preview

__all__ = [
    "get_logger",
    "preview",
    "normalize_media_type",
    "guess_media_type",
    "first_email",
    "first_phone",
    "linkedin_url",
    "looks_like_pdf",
    "count_visible_chars",
]
