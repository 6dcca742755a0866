"""
Trust models - derived trust score and its breakdown.
"""
from typing import Literal

from pydantic import BaseModel, Field

TrustLevel = Literal["excellent", "good", "fair", "poor"]


class TrustScore(BaseModel):
    """Derived trust score. Recomputed on demand, never persisted."""
    score: int = Field(ge=0, le=100, description="Final weighted score")
    level: TrustLevel

    # Component scores
    verification_score: int = Field(ge=0, le=100)
    performance_score: int = Field(ge=0, le=100)
    reliability_score: int = Field(ge=0, le=100)


class ContractorTrust(BaseModel):
    """A contractor's trust score together with its advisory suggestions."""
    contractor_id: str
    contractor_name: str = ""
    trust: TrustScore
    suggestions: list[str] = Field(default_factory=list)

    @property
    def is_trusted(self) -> bool:
        """Check if the contractor rates good or better."""
        return self.trust.level in ("excellent", "good")
