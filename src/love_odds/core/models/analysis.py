import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Condition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str
    one_in_x: float = Field(..., alias="oneInX", description="1 chance in X")

    @field_validator("one_in_x")
    @classmethod
    def _check_odds(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError(f"oneInX must be a finite positive number, got {value}")
        # A model occasionally emits a probability instead of odds
        return max(value, 1.0)


class Event(BaseModel):
    circumstance: str
    conditions: List[Condition] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Structured breakdown produced by the language model for one story."""

    model_config = ConfigDict(populate_by_name=True)

    events: List[Event] = Field(default_factory=list)
    final_one_in_x: Optional[float] = Field(
        None,
        alias="finalOneInX",
        description="Model-supplied product of every condition; null when unusable",
    )
    summary: str = ""

    @field_validator("final_one_in_x")
    @classmethod
    def _drop_unusable_final(cls, value: Optional[float]) -> Optional[float]:
        if value is None or not math.isfinite(value) or value <= 0:
            return None
        return value
