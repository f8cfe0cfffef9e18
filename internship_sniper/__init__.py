"""Resume extraction service for the internship finder: AI tiers with a regex fallback."""

from internship_sniper.config import load_pipeline_config
from internship_sniper.cv_pipeline.resume_pipeline import (
    ResumeExtractionPipeline,
    run_resume_pipeline,
    run_resume_pipeline_sync,
)
from internship_sniper.schemas import PipelineConfig, ResumeRecord, UploadedDocument

__all__ = [
    "load_pipeline_config",
    "ResumeExtractionPipeline",
    "run_resume_pipeline",
    "run_resume_pipeline_sync",
    "PipelineConfig",
    "ResumeRecord",
    "UploadedDocument",
]
