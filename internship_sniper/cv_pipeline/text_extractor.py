"""Extract raw text from uploaded resumes (PDF, plain text, DOCX, images). In-memory only."""

import unicodedata
from io import BytesIO
from typing import Optional

import pdfplumber

from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.services.ocr_service import recognize_text
from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)


def _normalize_unicode(text: str) -> str:
    """Normalize unicode (NFC) so ligatures and combined accents compare equal."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", text)


def _extract_pdf(content: bytes) -> str:
    """
    Walk every page in order, joining the page's word tokens with single spaces
    and pages with newlines. Empty string on any failure.
    """
    try:
        with pdfplumber.open(BytesIO(content)) as pdf:
            page_texts = []
            for page in pdf.pages:
                words = page.extract_words()
                page_texts.append(" ".join(w["text"] for w in words if w.get("text")))
    except Exception as e:
        logger.warning("PDF text extraction failed: %s", e)
        return ""
    return _normalize_unicode("\n".join(page_texts)).strip()


def _extract_docx(content: bytes) -> str:
    """Extract paragraph text from DOCX using python-docx."""
    from docx import Document

    try:
        doc = Document(BytesIO(content))
    except Exception as e:
        logger.warning("DOCX extraction failed: %s", e)
        return ""
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    return _normalize_unicode("\n".join(parts)).strip()


def _decode_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def extract_document_text(document: UploadedDocument, ocr_language: Optional[str] = "eng") -> str:
    """
    Best-effort plain text for text-reasoning tiers. PDF -> page text,
    .txt -> UTF-8 verbatim, DOCX -> paragraphs, anything else -> OCR.
    Never raises; an empty result means extraction failed.
    """
    if not document.content:
        return ""
    try:
        if document.is_pdf:
            text = _extract_pdf(document.content)
        elif document.is_plain_text:
            text = _decode_text(document.content)
        elif document.is_docx:
            text = _extract_docx(document.content)
        else:
            text = recognize_text(document.content, language=ocr_language or "eng")
    except Exception as e:
        logger.exception("Text extraction failed for %s: %s", document.filename or "upload", e)
        return ""
    logger.info(
        "Extracted %s characters from %s (%s)",
        len(text),
        document.filename or "upload",
        document.media_type or "unknown type",
    )
    return text
