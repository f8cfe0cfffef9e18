"""Optical character recognition for image uploads (Tesseract via pytesseract)."""

from io import BytesIO

import pytesseract
from PIL import Image

from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)


def recognize_text(image_bytes: bytes, language: str = "eng") -> str:
    """
    Run Tesseract over the image bytes. Returns recognized text,
    or empty string if the image cannot be read or OCR fails.
    """
    if not image_bytes:
        return ""
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            image.load()
            text = pytesseract.image_to_string(image, lang=language)
    except pytesseract.TesseractNotFoundError:
        logger.error("Tesseract binary not found; install tesseract-ocr to enable OCR")
        return ""
    except Exception as e:
        logger.warning("OCR failed: %s", e)
        return ""
    logger.info("OCR recognized %s characters", len(text or ""))
    return text or ""
