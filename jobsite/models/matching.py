"""
Matching models - template phases, qualification checklists, and match results.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class TemplatePhase(BaseModel):
    """A phase of a project template and the trades it needs."""
    id: str
    name: str = ""
    trades: list[str] = Field(default_factory=list)


class QualificationRequirement(BaseModel):
    """One line of the qualification checklist."""
    name: str
    met: bool
    value: Optional[Any] = None


class ContractorQualification(BaseModel):
    """Whether a contractor qualifies for a phase, with the checklist behind it."""
    contractor_id: str
    phase_id: str
    qualified: bool
    reasons: list[str] = Field(default_factory=list)
    requirements: list[QualificationRequirement] = Field(default_factory=list)
    score: float = Field(ge=0, le=100)


class MatchResult(BaseModel):
    """A contractor matched against a phase."""
    contractor_id: str
    contractor_name: str = ""
    phase_id: str
    match_score: float = Field(ge=0, le=100)
    qualification: ContractorQualification
    match_reasons: list[str] = Field(default_factory=list)
