"""Upload ingress: size ceiling, error envelope, and per-session cancellation of stale runs."""

import asyncio
from typing import Awaitable, Callable, Dict, Optional

from internship_sniper.config import MAX_UPLOAD_BYTES
from internship_sniper.cv_pipeline.resume_pipeline import run_resume_pipeline
from internship_sniper.errors import UploadSupersededError
from internship_sniper.schemas.pipeline_config import PipelineConfig
from internship_sniper.schemas.resume_record import ResumeRecord
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.utils.logger import get_logger

logger = get_logger(__name__)

NO_FILE_MESSAGE = "No file was uploaded. Please select a resume file."
TOO_LARGE_MESSAGE = "File is larger than the 5 MB upload limit. Please upload a smaller file."
SUPERSEDED_MESSAGE = "A newer upload replaced this one."
FAILURE_MESSAGE = "An error occurred while processing your resume."


class UploadSessionRegistry:
    """
    At most one in-flight extraction per client session. Starting a new one cancels
    the previous task; its caller gets UploadSupersededError instead of racing.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, asyncio.Task] = {}

    def active(self, session_id: str) -> Optional[asyncio.Task]:
        task = self._tasks.get(session_id)
        return task if task is not None and not task.done() else None

    async def run(self, session_id: str, job: Callable[[], Awaitable[ResumeRecord]]) -> ResumeRecord:
        previous = self.active(session_id)
        if previous is not None:
            logger.info("Cancelling superseded extraction for session %s", session_id)
            previous.cancel()

        task = asyncio.ensure_future(job())
        self._tasks[session_id] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._tasks.get(session_id) is not task:
                raise UploadSupersededError(session_id) from None
            raise
        finally:
            if self._tasks.get(session_id) is task:
                del self._tasks[session_id]


async def handle_resume_upload(
    file_bytes: Optional[bytes],
    filename: str = "",
    media_type: str = "",
    *,
    config: PipelineConfig,
    session_id: Optional[str] = None,
    registry: Optional[UploadSessionRegistry] = None,
) -> dict:
    """
    Entry used by the HTTP layer. Always returns a complete record payload
    (wire field names); problems are reported in the summary field.
    """
    if not file_bytes:
        logger.info("No file uploaded")
        return ResumeRecord.empty(NO_FILE_MESSAGE).to_payload()
    if len(file_bytes) > MAX_UPLOAD_BYTES:
        logger.info("Rejected upload %s: %s bytes", filename, len(file_bytes))
        return ResumeRecord.empty(TOO_LARGE_MESSAGE).to_payload()

    document = UploadedDocument.from_upload(file_bytes, filename=filename, media_type=media_type)
    logger.info("Resume upload started: %s, %s, %s bytes", document.filename, document.media_type, document.size)
    try:
        if session_id and registry is not None:
            record = await registry.run(session_id, lambda: run_resume_pipeline(document, config))
        else:
            record = await run_resume_pipeline(document, config)
    except UploadSupersededError as e:
        logger.info("%s", e)
        return ResumeRecord.empty(SUPERSEDED_MESSAGE).to_payload()
    except Exception as e:
        logger.exception("Resume upload failed: %s", e)
        return ResumeRecord.empty(FAILURE_MESSAGE).to_payload()
    return record.to_payload()
