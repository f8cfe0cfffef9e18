"""Exception taxonomy for the resume extraction pipeline."""

from typing import Optional


class ResumePipelineError(Exception):
    """Base class for every error raised inside the extraction pipeline."""


class UnsupportedFormatError(ResumePipelineError):
    """Document is not a PDF, a supported image, or readable text."""


class NoPagesError(ResumePipelineError):
    """Rasterization found zero renderable pages."""


class RasterizationFailedError(ResumePipelineError):
    """A page failed to render; the whole document is abandoned."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransportError(ResumePipelineError):
    """Network or provider failure (including timeouts)."""


class RateLimitedError(TransportError):
    """Provider rejected the call as rate limited or over quota."""


class InvalidResponseError(ResumePipelineError):
    """Provider text could not be recovered into an acceptable JSON object."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class ExtractionExhaustedError(ResumePipelineError):
    """No tier produced a record. Resolved internally by the regex fallback."""


class UploadSupersededError(ResumePipelineError):
    """A newer upload for the same session cancelled this extraction."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Upload for session {session_id!r} was superseded by a newer upload")
        self.session_id = session_id
