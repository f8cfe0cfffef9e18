"""Turn a PDF or image upload into a bounded list of page images for a vision model."""

import base64
from dataclasses import dataclass
from io import BytesIO
from typing import List

import pdfplumber
from PIL import Image, UnidentifiedImageError

from internship_sniper.errors import NoPagesError, RasterizationFailedError, UnsupportedFormatError
from internship_sniper.utils.helpers import IMAGE_MEDIA_TYPES, looks_like_pdf, normalize_media_type
from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)

BASE_DPI = 72  # PDF user-space units per inch; scale 1.0 renders at this resolution
_PIL_FORMATS = {"PNG", "JPEG", "WEBP", "BMP"}


@dataclass(frozen=True)
class RasterPage:
    """One standalone page image."""

    media_type: str
    data: bytes

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


def _encode_page(page, scale: float, jpeg_quality: int) -> RasterPage:
    page_image = page.to_image(resolution=BASE_DPI * scale)
    image = page_image.original.convert("RGB")
    try:
        buffer = BytesIO()
        image.save(buffer, format="JPEG", quality=jpeg_quality)
        return RasterPage(media_type="image/jpeg", data=buffer.getvalue())
    finally:
        image.close()
        page_image.original.close()


def _rasterize_pdf(content: bytes, max_pages: int, scale: float, jpeg_quality: int) -> List[RasterPage]:
    try:
        pdf = pdfplumber.open(BytesIO(content))
    except Exception as e:
        raise UnsupportedFormatError(f"Not a readable PDF: {e}") from e

    with pdf:
        try:
            source_pages = list(pdf.pages)
        except Exception as e:
            raise UnsupportedFormatError(f"Not a readable PDF: {e}") from e
        total = len(source_pages)
        if total == 0:
            raise NoPagesError("PDF has no pages")
        pages: List[RasterPage] = []
        # Pages beyond max_pages are ignored, not an error
        for page in source_pages[:max_pages]:
            try:
                pages.append(_encode_page(page, scale, jpeg_quality))
            except Exception as e:
                raise RasterizationFailedError(f"Failed to render page {page.page_number}: {e}", cause=e) from e
    logger.info(
        "Rasterized %s/%s PDF page(s) (%s KB total)",
        len(pages),
        total,
        sum(len(p.data) for p in pages) // 1024,
    )
    return pages


def _passthrough_image(content: bytes, media_type: str) -> List[RasterPage]:
    try:
        with Image.open(BytesIO(content)) as image:
            detected = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise UnsupportedFormatError(f"Unreadable {media_type} image: {e}") from e
    if detected not in _PIL_FORMATS:
        raise UnsupportedFormatError(f"Unsupported image format: {detected}")
    return [RasterPage(media_type=media_type, data=content)]


def rasterize_document(
    content: bytes,
    media_type: str,
    filename: str = "",
    max_pages: int = 3,
    scale: float = 1.0,
    jpeg_quality: int = 80,
) -> List[RasterPage]:
    """
    PDF: render the first `max_pages` pages as JPEG. Image (PNG/JPEG/WEBP/BMP):
    return the original bytes unchanged. Any page failure aborts the document.
    Raises UnsupportedFormatError, NoPagesError or RasterizationFailedError.
    """
    media_type = normalize_media_type(media_type)
    if not content:
        raise NoPagesError("Empty document")
    if looks_like_pdf(content, media_type, filename):
        return _rasterize_pdf(content, max_pages, scale, jpeg_quality)
    if media_type in IMAGE_MEDIA_TYPES:
        return _passthrough_image(content, media_type)
    raise UnsupportedFormatError(f"Cannot rasterize media type {media_type or 'unknown'!r}")
