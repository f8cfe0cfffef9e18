"""Tier contract shared by every extraction strategy, plus the per-run context."""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from internship_sniper.cv_pipeline.response_sanitizer import SanitizedResponse
from internship_sniper.errors import InvalidResponseError
from internship_sniper.schemas.extraction_attempt import AttemptOutcome, ExtractionAttempt
from internship_sniper.schemas.pipeline_config import PipelineConfig
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.utils.helpers import count_visible_chars

SUCCESS = "success"
SKIP = "skip"
FAIL = "fail"


@dataclass(frozen=True)
class TierOutcome:
    status: str
    payload: Any = None
    reason: str = ""

    @classmethod
    def success(cls, payload: Any) -> "TierOutcome":
        return cls(SUCCESS, payload=payload)

    @classmethod
    def skip(cls, reason: str) -> "TierOutcome":
        return cls(SKIP, reason=reason)

    @classmethod
    def fail(cls, reason: str) -> "TierOutcome":
        return cls(FAIL, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCESS


TextExtractor = Callable[[UploadedDocument, str], str]


class PipelineRun:
    """
    State owned by a single pipeline run: the document, the read-only config,
    the lazily extracted text (computed at most once), and the attempt log.
    """

    def __init__(self, document: UploadedDocument, config: PipelineConfig, text_extractor: TextExtractor) -> None:
        self.document = document
        self.config = config
        self.attempts: List[ExtractionAttempt] = []
        self._text_extractor = text_extractor
        self._text: Optional[str] = None

    async def document_text(self) -> str:
        if self._text is None:
            text = await asyncio.to_thread(self._text_extractor, self.document, self.config.ocr_language)
            self._text = text or ""
        return self._text

    async def has_usable_text(self) -> bool:
        return count_visible_chars(await self.document_text()) >= self.config.min_text_chars

    def record(self, tier: str, provider: str, outcome: AttemptOutcome, started: float) -> ExtractionAttempt:
        attempt = ExtractionAttempt(
            tier=tier,
            provider=provider,
            outcome=outcome,
            latency_ms=int((time.monotonic() - started) * 1000),
        )
        self.attempts.append(attempt)
        return attempt


class ExtractionTier(ABC):
    """One strategy in the fallback chain. attempt() must not raise for provider failures."""

    name: str = ""
    provider: str = ""

    @abstractmethod
    async def attempt(self, document: UploadedDocument, run: PipelineRun) -> TierOutcome:
        """Return success(payload), skip(reason) or fail(reason)."""
        ...

    async def aclose(self) -> None:
        """Release provider clients this tier created. Injected clients are left open."""


def has_name(payload: Any) -> bool:
    return isinstance(payload, dict) and bool(str(payload.get("name") or "").strip())


def accept_payload(parsed: SanitizedResponse, require_name: bool) -> dict:
    """Return the parsed object, or raise InvalidResponseError if a tier must not accept it."""
    if not parsed.is_object:
        raise InvalidResponseError(parsed.error or "response is not a JSON object", raw_text=parsed.raw)
    if require_name and not has_name(parsed.value):
        raise InvalidResponseError("response has no name", raw_text=parsed.raw)
    return parsed.value
