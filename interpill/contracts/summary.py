"""
Drug-interaction summary contract.

The same model validates the AI provider's answer and serializes the gateway
response, so the wire shape is defined in exactly one place.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from interpill.config import MOCK_SUMMARY_DRUG

RiskLevel = Literal["low", "moderate", "high"]


class Summary(BaseModel):
    """Interaction summary returned by ``/ai/summary``.

    Input is accepted under the camelCase wire names only. ``riskLevel`` and
    every ``perDrug`` value must be a ``RiskLevel``; anything else fails
    validation rather than being coerced.
    """

    model_config = ConfigDict(strict=True)

    risk_level: RiskLevel = Field(alias="riskLevel")
    highlights: list[str]
    recommendations: list[str]
    caveats: list[str]
    per_drug: dict[str, RiskLevel] = Field(alias="perDrug")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def mock_summary() -> Summary:
    """Canned summary served in mock mode."""
    return Summary(
        riskLevel="low",
        highlights=[],
        recommendations=[],
        caveats=[],
        perDrug={MOCK_SUMMARY_DRUG: "low"},
    )
