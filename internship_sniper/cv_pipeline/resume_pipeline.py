"""
Resume extraction pipeline: tries each tier in priority order and returns the first
successful result, normalized. The caller always gets a complete ResumeRecord.
"""

import asyncio
from typing import List, Optional, Sequence

from internship_sniper.cv_pipeline.field_normalizer import normalize_resume_record
from internship_sniper.cv_pipeline.regex_extractor import extract_resume_fields
from internship_sniper.cv_pipeline.text_extractor import extract_document_text
from internship_sniper.errors import ExtractionExhaustedError
from internship_sniper.schemas.pipeline_config import PipelineConfig
from internship_sniper.schemas.resume_record import ResumeRecord
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.tiers import default_tiers
from internship_sniper.tiers.base import ExtractionTier, PipelineRun, TextExtractor, TierOutcome
from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)


class ResumeExtractionPipeline:
    """
    Ordered loop over tier handlers. Each tier is awaited to completion before the
    next starts; a skip or fail advances, the first success ends the run.
    """

    def __init__(
        self,
        config: PipelineConfig,
        tiers: Optional[Sequence[ExtractionTier]] = None,
        text_extractor: Optional[TextExtractor] = None,
    ) -> None:
        self.config = config
        self.tiers: List[ExtractionTier] = list(tiers) if tiers is not None else default_tiers()
        self._text_extractor = text_extractor or extract_document_text

    async def run(self, document: UploadedDocument) -> ResumeRecord:
        run = PipelineRun(document, self.config, self._text_extractor)
        logger.info(
            "Resume extraction started: %s (%s, %s bytes)",
            document.filename or "upload",
            document.media_type or "unknown type",
            document.size,
        )
        try:
            record = await self._run_tiers(document, run)
        except ExtractionExhaustedError as e:
            logger.warning("%s; using regex extraction", e)
            record = extract_resume_fields(await run.document_text())
        finally:
            await self._close_tiers()
        if run.attempts:
            logger.info("Provider attempts: %s", ", ".join(a.describe() for a in run.attempts))
        return normalize_resume_record(record)

    async def _run_tiers(self, document: UploadedDocument, run: PipelineRun):
        for tier in self.tiers:
            outcome = await self._attempt_tier(tier, document, run)
            if outcome.succeeded:
                logger.info("Resume extracted by %s tier", tier.name)
                return outcome.payload
            if outcome.status == "skip":
                logger.info("Skipping %s tier: %s", tier.name, outcome.reason)
            else:
                logger.warning("%s tier failed: %s", tier.name, outcome.reason)
        raise ExtractionExhaustedError(f"No tier succeeded out of {len(self.tiers)}")

    async def _attempt_tier(self, tier: ExtractionTier, document: UploadedDocument, run: PipelineRun) -> TierOutcome:
        try:
            return await tier.attempt(document, run)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in %s tier: %s", tier.name, e)
            return TierOutcome.fail(f"unexpected error: {e}")

    async def _close_tiers(self) -> None:
        for tier in self.tiers:
            try:
                await tier.aclose()
            except Exception as e:
                logger.warning("Closing %s tier client failed: %s", tier.name, e)


async def run_resume_pipeline(
    document: UploadedDocument,
    config: PipelineConfig,
    tiers: Optional[Sequence[ExtractionTier]] = None,
) -> ResumeRecord:
    """Turn an uploaded document into a fully normalized ResumeRecord. Never raises."""
    return await ResumeExtractionPipeline(config, tiers=tiers).run(document)


def run_resume_pipeline_sync(document: UploadedDocument, config: PipelineConfig) -> ResumeRecord:
    """
    Blocking wrapper for scripts and other sync callers.
    Uses its own event loop, so it must not be called from inside a running loop.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(run_resume_pipeline(document, config))
    finally:
        loop.close()
