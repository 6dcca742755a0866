"""
Contractor models - verifications, trust indicators, and the contractor profile.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Verification(BaseModel):
    """A single verification record produced by the verification workflow."""
    # Plain string: unknown types load and score nothing
    type: str = Field(description="identity, license, insurance, background, references or payment")
    verified: bool = False
    verified_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    document_url: Optional[str] = None


class TrustIndicators(BaseModel):
    """Behavioural indicators collected for a contractor."""
    response_time: float = Field(ge=0, description="Average response time in hours")
    response_rate: float = Field(ge=0, le=100, description="Percent of inquiries answered")
    on_time_rate: float = Field(ge=0, le=100, description="Percent of projects finished on time")
    repeat_client_rate: float = Field(ge=0, le=100, description="Percent of clients that hire again")
    dispute_rate: float = Field(ge=0, le=100, description="Percent of projects with a dispute")


class Contractor(BaseModel):
    """
    Contractor profile as held by the marketplace.
    Verifications should be unique by type; callers are responsible for that.
    """
    id: str
    name: str = ""
    company: str = ""
    trade: str = ""
    location: str = ""
    rating: float = Field(default=0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    completed_projects: int = Field(default=0, ge=0)
    years_in_business: float = Field(default=0, ge=0)
    specialties: list[str] = Field(default_factory=list)
    verifications: list[Verification] = Field(default_factory=list)
    trust_indicators: Optional[TrustIndicators] = None

    def is_verified(self, verification_type: str) -> bool:
        """True when any record of the type is verified."""
        return any(v.type == verification_type and v.verified for v in self.verifications)

    @property
    def trades(self) -> list[str]:
        """Primary trade followed by specialties."""
        trades = [self.trade] if self.trade else []
        return trades + [s for s in self.specialties if s not in trades]
