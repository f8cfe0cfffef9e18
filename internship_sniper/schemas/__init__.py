"""Schema exports."""

from .extraction_attempt import ExtractionAttempt
from .pipeline_config import PipelineConfig, TextTierSettings, VisionTierSettings
from .resume_record import ExperienceEntry, ResumeRecord
from .uploaded_document import UploadedDocument

__all__ = [
    "ExperienceEntry",
    "ResumeRecord",
    "UploadedDocument",
    "ExtractionAttempt",
    "PipelineConfig",
    "VisionTierSettings",
    "TextTierSettings",
]
