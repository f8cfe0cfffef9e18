"""Regex tier: the deterministic terminal state of the fallback chain."""

from internship_sniper.cv_pipeline.regex_extractor import extract_resume_fields
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.tiers.base import ExtractionTier, PipelineRun, TierOutcome


class RegexTier(ExtractionTier):
    name = "regex"
    provider = "patterns"

    async def attempt(self, document: UploadedDocument, run: PipelineRun) -> TierOutcome:
        text = await run.document_text()
        return TierOutcome.success(extract_resume_fields(text))
