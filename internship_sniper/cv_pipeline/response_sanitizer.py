"""Recover a JSON object from LLM output wrapped in prose, code fences, or trailing commas."""

import json
import re
from dataclasses import dataclass
from typing import Any

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


@dataclass(frozen=True)
class SanitizedResponse:
    """Outcome of parse_json_response. On failure `value` is None and `raw` keeps the input."""

    ok: bool
    value: Any = None
    raw: str = ""
    error: str = ""

    @property
    def is_object(self) -> bool:
        return self.ok and isinstance(self.value, dict)


def parse_json_response(text: Any) -> SanitizedResponse:
    """
    Shared parser for every AI tier. Steps, each applied to the previous result:
    strip ```json / ``` fences, slice from the first "{" to the last "}",
    drop trailing commas before "}" or "]", then strict json.loads.
    Never raises.
    """
    if not isinstance(text, str):
        return SanitizedResponse(ok=False, raw="" if text is None else repr(text), error="response is not text")

    candidate = _FENCE.sub("", text)
    first_open = candidate.find("{")
    last_close = candidate.rfind("}")
    if first_open != -1 and last_close > first_open:
        candidate = candidate[first_open : last_close + 1]
    candidate = _TRAILING_COMMA.sub(r"\1", candidate)

    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, ValueError) as e:
        return SanitizedResponse(ok=False, raw=text, error=str(e))
    return SanitizedResponse(ok=True, value=value, raw=text)
