from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


RITUAL_FIELDS = (
    "id",
    "name",
    "origin_culture",
    "category",
    "bug_fixed",
    "mechanism",
    "modern_script",
    "ethical_guardrails",
)


class Ritual(BaseModel):
    """
    One catalog record describing an organizational practice.

    Unknown keys are ignored so payloads written by a newer schema still load.
    Every declared field is required; a payload from an older schema that lacks
    one is rejected rather than back-filled.
    """

    model_config = ConfigDict(extra="ignore", strict=True)

    id: str = Field(min_length=1)
    name: str
    origin_culture: str
    category: str
    bug_fixed: str
    mechanism: str
    # key order is preserved and drives the terminal listing
    modern_script: Dict[str, str]
    ethical_guardrails: List[str]
