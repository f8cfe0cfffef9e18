"""In-memory uploaded document. Owned by one request and never persisted."""

from pydantic import BaseModel, ConfigDict, Field

from internship_sniper.utils.helpers import (
    DOCX_MEDIA_TYPE,
    GENERIC_MEDIA_TYPES,
    IMAGE_MEDIA_TYPES,
    TEXT_MEDIA_TYPE,
    guess_media_type,
    looks_like_pdf,
    normalize_media_type,
)


class UploadedDocument(BaseModel):
    """Uploaded file bytes plus declared media type and original filename."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., repr=False, description="Raw file bytes")
    media_type: str = Field(default="", description="Declared (normalized) media type")
    filename: str = Field(default="", description="Original filename from the upload")

    @classmethod
    def from_upload(cls, content: bytes, filename: str = "", media_type: str = "") -> "UploadedDocument":
        """Normalize the declared type; fall back to the extension when it is missing or generic."""
        declared = normalize_media_type(media_type)
        if declared in GENERIC_MEDIA_TYPES:
            declared = guess_media_type(filename) or declared
        return cls(content=content or b"", media_type=declared, filename=filename or "")

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        """Declared type, .pdf extension, or %PDF- header."""
        return looks_like_pdf(self.content, self.media_type, self.filename)

    @property
    def is_plain_text(self) -> bool:
        return self.media_type == TEXT_MEDIA_TYPE or self.filename.lower().endswith(".txt")

    @property
    def is_docx(self) -> bool:
        return self.media_type == DOCX_MEDIA_TYPE or self.filename.lower().endswith(".docx")

    @property
    def is_image(self) -> bool:
        return self.media_type in IMAGE_MEDIA_TYPES
