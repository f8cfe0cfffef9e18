"""Transient record of one provider attempt, used for control flow and logging only."""

from typing import Literal

from pydantic import BaseModel, Field

AttemptOutcome = Literal["success", "invalid-json", "transport-error", "rate-limited"]


class ExtractionAttempt(BaseModel):
    tier: str = Field(..., description="Tier name (vision, text_a, text_b, regex)")
    provider: str = Field(..., description="Provider or model identifier")
    outcome: AttemptOutcome
    latency_ms: int = Field(default=0, description="Wall time of the attempt in milliseconds")

    def describe(self) -> str:
        return f"{self.tier}/{self.provider}={self.outcome}({self.latency_ms}ms)"
