"""Text tiers: send extracted resume text to a chat-completion provider and parse its JSON."""

import asyncio
import time
from typing import Callable, Dict, List

from internship_sniper.cv_pipeline.prompts import build_parser_messages, build_single_turn_messages
from internship_sniper.cv_pipeline.response_sanitizer import parse_json_response
from internship_sniper.errors import InvalidResponseError, RateLimitedError, TransportError
from internship_sniper.schemas.pipeline_config import PipelineConfig, TextTierSettings
from internship_sniper.schemas.uploaded_document import UploadedDocument
from internship_sniper.services.http_chat_service import HttpChatClient
from internship_sniper.services.openai_chat_service import OpenAIChatClient
from internship_sniper.tiers.base import ExtractionTier, PipelineRun, TierOutcome, accept_payload
from internship_sniper.utils.logger import get_logger, preview

logger = get_logger(__name__)

MessageBuilder = Callable[[str], List[Dict[str, str]]]


class TextCompletionTier(ExtractionTier):
    """
    Shared shape: reuse the run's cached document text, require enough of it,
    send a capped prefix at low temperature, and accept only objects with a name
    (unless the tier's settings say otherwise).
    """

    build_messages: MessageBuilder = staticmethod(build_parser_messages)

    def __init__(self, client=None) -> None:
        self._client = client
        self._owns_client = False

    def settings(self, config: PipelineConfig) -> TextTierSettings:
        raise NotImplementedError

    def _create_client(self, settings: TextTierSettings):
        raise NotImplementedError

    def _get_client(self, settings: TextTierSettings):
        if self._client is None:
            self._client = self._create_client(settings)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            client, self._client = self._client, None
            self._owns_client = False
            await client.aclose()

    async def attempt(self, document: UploadedDocument, run: PipelineRun) -> TierOutcome:
        settings = self.settings(run.config)
        if not settings.is_configured:
            return TierOutcome.skip(f"no {self.provider} credential configured")
        if not await run.has_usable_text():
            return TierOutcome.skip("not enough extracted text for a text tier")

        text = await run.document_text()
        messages = self.build_messages(text[: settings.max_input_chars])
        client = self._get_client(settings)
        started = time.monotonic()
        logger.info("Trying %s (%s, %s chars)", self.name, settings.model, min(len(text), settings.max_input_chars))
        try:
            content = await asyncio.wait_for(
                client.complete(
                    settings.model,
                    messages,
                    max_tokens=settings.max_tokens,
                    temperature=settings.temperature,
                    top_p=settings.top_p,
                ),
                timeout=settings.timeout_seconds,
            )
        except RateLimitedError as e:
            run.record(self.name, settings.model, "rate-limited", started)
            logger.warning("%s (%s) rate limited: %s", self.name, self.provider, e)
            return TierOutcome.fail(str(e))
        except asyncio.TimeoutError:
            run.record(self.name, settings.model, "transport-error", started)
            logger.warning("%s (%s) timed out after %ss", self.name, self.provider, settings.timeout_seconds)
            return TierOutcome.fail("timed out")
        except TransportError as e:
            run.record(self.name, settings.model, "transport-error", started)
            logger.warning("%s (%s) failed: %s", self.name, self.provider, e)
            return TierOutcome.fail(str(e))

        try:
            payload = accept_payload(parse_json_response(content), settings.require_name)
        except InvalidResponseError as e:
            run.record(self.name, settings.model, "invalid-json", started)
            logger.warning(
                "%s (%s) returned invalid JSON. Raw (first 200 chars): %s",
                self.name,
                self.provider,
                preview(e.raw_text),
            )
            return TierOutcome.fail(str(e))

        run.record(self.name, settings.model, "success", started)
        logger.info("%s success (%s): %s", self.name, self.provider, payload.get("name", ""))
        return TierOutcome.success(payload)


class DigitalOceanTextTier(TextCompletionTier):
    """Tier A: Qwen3 on DigitalOcean serverless inference via the OpenAI SDK."""

    name = "text_a"
    provider = "digitalocean"

    def settings(self, config: PipelineConfig) -> TextTierSettings:
        return config.text_a

    def _create_client(self, settings: TextTierSettings):
        return OpenAIChatClient(settings.api_key, settings.endpoint, settings.timeout_seconds)


class NvidiaTextTier(TextCompletionTier):
    """Tier B: Kimi on NVIDIA's integrate API, called with plain httpx."""

    name = "text_b"
    provider = "nvidia"
    build_messages = staticmethod(build_single_turn_messages)

    def settings(self, config: PipelineConfig) -> TextTierSettings:
        return config.text_b

    def _create_client(self, settings: TextTierSettings):
        return HttpChatClient(settings.api_key, settings.endpoint, settings.timeout_seconds)
