"""Resume upload building blocks: rasterization, text extraction, JSON recovery, normalization."""

from .document_rasterizer import RasterPage, rasterize_document
from .field_normalizer import normalize_resume_record
from .regex_extractor import extract_resume_fields
from .response_sanitizer import SanitizedResponse, parse_json_response
from .text_extractor import extract_document_text

__all__ = [
    "RasterPage",
    "rasterize_document",
    "extract_document_text",
    "parse_json_response",
    "SanitizedResponse",
    "normalize_resume_record",
    "extract_resume_fields",
]
