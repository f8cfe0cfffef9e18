"""Helper utilities: media-type handling and contact-field patterns."""

import re
from typing import Optional

PDF_MEDIA_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"
TEXT_MEDIA_TYPE = "text/plain"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
GENERIC_MEDIA_TYPES = {"", "application/octet-stream", "binary/octet-stream"}

IMAGE_MEDIA_TYPES = ("image/png", "image/jpeg", "image/webp", "image/bmp")

_EXTENSION_MEDIA_TYPES = {
    ".pdf": PDF_MEDIA_TYPE,
    ".txt": TEXT_MEDIA_TYPE,
    ".docx": DOCX_MEDIA_TYPE,
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
# Optional +, 1-4 digit code, then grouped runs of 3+ digits
PHONE_PATTERN = re.compile(r"\+?\(?[0-9]{1,4}\)?[-\s.]?[0-9]{3,}[-\s.]?[0-9]{3,}[-\s.]?[0-9]{2,}")
LINKEDIN_PATTERN = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lowercase, drop parameters, and map the image/jpg alias to image/jpeg."""
    value = (media_type or "").split(";")[0].strip().lower()
    if value in ("image/jpg", "image/pjpeg"):
        return "image/jpeg"
    return value


def guess_media_type(filename: Optional[str]) -> str:
    """Media type implied by the filename extension, or empty string."""
    name = (filename or "").strip().lower()
    for extension, media_type in _EXTENSION_MEDIA_TYPES.items():
        if name.endswith(extension):
            return media_type
    return ""


def looks_like_pdf(content: bytes, media_type: str = "", filename: str = "") -> bool:
    """PDF by declared type, .pdf extension, or the %PDF- header."""
    return (
        normalize_media_type(media_type) == PDF_MEDIA_TYPE
        or (filename or "").lower().endswith(".pdf")
        or (content or b"")[:5] == PDF_MAGIC
    )


def first_email(text: str) -> str:
    match = EMAIL_PATTERN.search(text or "")
    return match.group(0) if match else ""


def first_phone(text: str) -> str:
    match = PHONE_PATTERN.search(text or "")
    return match.group(0).strip() if match else ""


def linkedin_url(text: str) -> str:
    """First linkedin.com/in/<handle> token, rebuilt as a full https URL."""
    match = LINKEDIN_PATTERN.search(text or "")
    return f"https://{match.group(0)}" if match else ""


def count_visible_chars(text: Optional[str]) -> int:
    return sum(1 for ch in (text or "") if not ch.isspace())
