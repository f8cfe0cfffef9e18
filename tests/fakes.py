"""In-memory stand-ins for provider clients and collaborators."""

import asyncio

from internship_sniper.cv_pipeline.document_rasterizer import RasterPage
from internship_sniper.schemas.pipeline_config import PipelineConfig, VisionTierSettings
from internship_sniper.tiers.regex_tier import RegexTier

RESUME_TEXT = (
    "Jane Doe\n"
    "jane.doe@example.com\n"
    "+1 415-555-0100\n"
    "EXPERIENCE\n"
    "Acme Corp - Engineer\n"
    "Built things.\n"
    "EDUCATION\n"
    "B.Tech Computer Science, MIT\n"
    "2022\n"
    "CGPA: 8.9\n"
    "SKILLS\n"
    "Python, Go\n"
)


def make_config(vision=False, text_a=False, text_b=False, **overrides) -> PipelineConfig:
    """Config with the requested tiers credentialed and no backoff delay."""
    defaults = PipelineConfig()
    return PipelineConfig(
        vision=VisionTierSettings(api_key="vision-key" if vision else "", rate_limit_backoff_seconds=0),
        text_a=defaults.text_a.model_copy(update={"api_key": "a-key" if text_a else ""}),
        text_b=defaults.text_b.model_copy(update={"api_key": "b-key" if text_b else ""}),
        **overrides,
    )


class ScriptedCall:
    """Returns (or raises) the scripted responses in order; records every call."""

    def __init__(self, label, responses, log):
        self.label = label
        self.responses = list(responses)
        self.log = log

    def _next(self, entry):
        self.log.append(entry)
        if not self.responses:
            raise AssertionError(f"unexpected extra call to {self.label}")
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class FakeVisionClient(ScriptedCall):
    def __init__(self, responses, log):
        super().__init__("vision", responses, log)
        self.models = []

    async def generate(self, model, prompt, pages):
        self.models.append(model)
        return self._next(f"vision:{model}")


class FakeChatClient(ScriptedCall):
    def __init__(self, label, responses, log):
        super().__init__(label, responses, log)
        self.requests = []

    async def complete(self, model, messages, max_tokens, temperature, top_p=None):
        self.requests.append(
            {"model": model, "messages": messages, "max_tokens": max_tokens, "temperature": temperature, "top_p": top_p}
        )
        return self._next(self.label)


class SlowChatClient:
    async def complete(self, model, messages, max_tokens, temperature, top_p=None):
        await asyncio.sleep(10)
        return "{}"


class CountingRegexTier(RegexTier):
    def __init__(self, log):
        self.log = log

    async def attempt(self, document, run):
        self.log.append("regex")
        return await super().attempt(document, run)


def one_page_rasterizer(content, media_type, filename="", **kwargs):
    return [RasterPage(media_type="image/jpeg", data=b"\xff\xd8page")]


class CountingTextExtractor:
    def __init__(self, text=RESUME_TEXT):
        self.text = text
        self.calls = 0

    def __call__(self, document, ocr_language):
        self.calls += 1
        return self.text
