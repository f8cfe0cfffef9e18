"""Extraction tiers, in the order the pipeline tries them."""

from .base import ExtractionTier, PipelineRun, TierOutcome
from .regex_tier import RegexTier
from .text_tiers import DigitalOceanTextTier, NvidiaTextTier, TextCompletionTier
from .vision_tier import VisionTier


def default_tiers() -> list:
    """Fresh tier instances: vision, text A, text B, regex."""
    return [VisionTier(), DigitalOceanTextTier(), NvidiaTextTier(), RegexTier()]


__all__ = [
    "ExtractionTier",
    "PipelineRun",
    "TierOutcome",
    "VisionTier",
    "TextCompletionTier",
    "DigitalOceanTextTier",
    "NvidiaTextTier",
    "RegexTier",
    "default_tiers",
]
