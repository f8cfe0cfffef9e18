"""Vision tier: rasterize the upload and ask Gemini models to read the page images."""

import asyncio
import time
from typing import Callable, List, Optional

from internship_sniper.cv_pipeline.document_rasterizer import RasterPage, rasterize_document
from internship_sniper.cv_pipeline.prompts import VISION_EXTRACTION_PROMPT
from internship_sniper.cv_pipeline.response_sanitizer import parse_json_response
from internship_sniper.errors import (
    InvalidResponseError,
    NoPagesError,
    RasterizationFailedError,
    RateLimitedError,
    TransportError,
    UnsupportedFormatError,
)
from internship_sniper.schemas.pipeline_config import VisionTierSettings
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.services.gemini_service import GeminiVisionClient
from internship_sniper.tiers.base import ExtractionTier, PipelineRun, TierOutcome, accept_payload
from internship_sniper.utils.logger import get_logger, preview

logger = get_logger(__name__)

Rasterizer = Callable[..., List[RasterPage]]


class VisionTier(ExtractionTier):
    """
    Models are tried in configured order. A rate-limited call waits the backoff and
    retries the same model; any other failure moves straight to the next model.
    """

    name = "vision"
    provider = "gemini"

    def __init__(self, client=None, rasterize: Optional[Rasterizer] = None) -> None:
        self._client = client
        self._rasterize = rasterize or rasterize_document
        self._owns_client = False

    def _get_client(self, settings: VisionTierSettings):
        if self._client is None:
            self._client = GeminiVisionClient(settings.api_key, timeout_seconds=settings.timeout_seconds)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            client, self._client = self._client, None
            self._owns_client = False
            await client.aclose()

    async def _rasterize_pages(self, document: UploadedDocument, settings: VisionTierSettings) -> List[RasterPage]:
        return await asyncio.to_thread(
            self._rasterize,
            document.content,
            document.media_type,
            document.filename,
            max_pages=settings.max_pages,
            scale=settings.raster_scale,
            jpeg_quality=settings.jpeg_quality,
        )

    async def attempt(self, document: UploadedDocument, run: PipelineRun) -> TierOutcome:
        settings = run.config.vision
        if not settings.is_configured:
            return TierOutcome.skip("no vision credential configured")

        try:
            pages = await self._rasterize_pages(document, settings)
        except (UnsupportedFormatError, NoPagesError) as e:
            logger.info("Vision unavailable for %s: %s", document.filename or "upload", e)
            return TierOutcome.fail(str(e))
        except RasterizationFailedError as e:
            logger.warning("Rasterization failed: %s (cause: %r)", e, e.cause)
            return TierOutcome.fail(str(e))
        if not pages:
            return TierOutcome.fail("document has no renderable pages")

        client = self._get_client(settings)
        for model in settings.models:
            payload = await self._try_model(client, model, pages, settings, run)
            if payload is not None:
                return TierOutcome.success(payload)
        return TierOutcome.fail(f"all vision models exhausted ({', '.join(settings.models)})")

    async def _try_model(self, client, model: str, pages: List[RasterPage], settings: VisionTierSettings, run: PipelineRun):
        for attempt_no in range(1, settings.attempts_per_model + 1):
            started = time.monotonic()
            logger.info("Vision: %s (attempt %s) with %s page(s)", model, attempt_no, len(pages))
            try:
                response_text = await asyncio.wait_for(
                    client.generate(model, VISION_EXTRACTION_PROMPT, pages),
                    timeout=settings.timeout_seconds,
                )
            except RateLimitedError as e:
                run.record(self.name, model, "rate-limited", started)
                if attempt_no >= settings.attempts_per_model:
                    logger.warning("Vision %s still rate limited; moving on: %s", model, e)
                    return None
                logger.info("Vision %s rate limited; retrying in %ss", model, settings.rate_limit_backoff_seconds)
                # Cancelling the run aborts the wait
                await asyncio.sleep(settings.rate_limit_backoff_seconds)
                continue
            except (TransportError, asyncio.TimeoutError) as e:
                run.record(self.name, model, "transport-error", started)
                logger.warning("Vision %s attempt %s failed: %s", model, attempt_no, preview(str(e)))
                return None

            try:
                payload = accept_payload(parse_json_response(response_text), settings.require_name)
            except InvalidResponseError as e:
                run.record(self.name, model, "invalid-json", started)
                logger.warning("Vision %s returned unusable output (%s): %s", model, e, preview(e.raw_text))
                return None
            run.record(self.name, model, "success", started)
            logger.info("Vision success with %s: %s", model, payload.get("name", ""))
            return payload
        return None
