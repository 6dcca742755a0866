"""
Auto-matching - score and qualify contractors against project template phases.
"""
import logging
import random
from typing import Optional

from ..models.contractor import Contractor
from ..models.matching import (
    ContractorQualification,
    MatchResult,
    QualificationRequirement,
    TemplatePhase,
)


logger = logging.getLogger(__name__)

TRADE_MATCH_POINTS = 40
RATING_TIERS = ((4.5, 20), (4.0, 15), (3.5, 10))
PROJECT_TIERS = ((100, 20), (50, 15), (25, 10), (10, 5))
MAX_JITTER = 20

MIN_QUALIFYING_RATING = 3.5
MIN_QUALIFYING_PROJECTS = 5
MIN_REQUIREMENTS_MET = 3


def _tier(value: float, tiers: tuple[tuple[float, int], ...]) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


class AutoMatcher:
    """
    Matches contractors to template phases.

    The match score carries up to 20 points of random jitter so equally
    qualified contractors rotate; pass a seeded Random for repeatable runs.
    """

    def __init__(self, rng: Optional[random.Random] = None, jitter: bool = True):
        self.rng = rng if rng is not None else random.Random()
        self.jitter = jitter

    def match_score(
        self,
        contractor_trades: list[str],
        phase_trades: list[str],
        rating: float,
        completed_projects: int,
    ) -> float:
        """Trade overlap plus rating and experience tiers plus jitter, capped at 100."""
        score = 0.0

        if any(trade in contractor_trades for trade in phase_trades):
            score += TRADE_MATCH_POINTS

        score += _tier(rating, RATING_TIERS)
        score += _tier(completed_projects, PROJECT_TIERS)

        if self.jitter:
            score += min(MAX_JITTER, self.rng.random() * MAX_JITTER)

        return min(100.0, score)

    def qualify(self, contractor: Contractor, phase: TemplatePhase) -> ContractorQualification:
        """
        Run the qualification checklist for a phase.

        A contractor qualifies when at least three of the five requirements
        are met. Reasons list the missing requirements only when unqualified.
        """
        requirements = [
            QualificationRequirement(
                name="Trade Match",
                met=any(t == contractor.trade or t in contractor.specialties for t in phase.trades),
                value=contractor.trade,
            ),
            QualificationRequirement(
                name="Insurance Verified",
                met=contractor.is_verified("insurance"),
            ),
            QualificationRequirement(
                name="License Verified",
                met=contractor.is_verified("license"),
            ),
            QualificationRequirement(
                name="Minimum Rating",
                met=contractor.rating >= MIN_QUALIFYING_RATING,
                value=f"{contractor.rating:.1f}",
            ),
            QualificationRequirement(
                name="Experience",
                met=contractor.completed_projects >= MIN_QUALIFYING_PROJECTS,
                value=f"{contractor.completed_projects} projects",
            ),
        ]

        met_count = sum(1 for r in requirements if r.met)
        qualified = met_count >= MIN_REQUIREMENTS_MET

        reasons = []
        if not qualified:
            reasons = [f"Missing: {r.name}" for r in requirements if not r.met]

        return ContractorQualification(
            contractor_id=contractor.id,
            phase_id=phase.id,
            qualified=qualified,
            reasons=reasons,
            requirements=requirements,
            score=met_count / len(requirements) * 100,
        )

    def rank(
        self,
        contractors: list[Contractor],
        phase: TemplatePhase,
        min_score: float = 0,
        qualified_only: bool = False,
    ) -> list[MatchResult]:
        """
        Score and rank contractors for a phase.

        Args:
            contractors: Candidate contractors
            phase: Phase to staff
            min_score: Drop matches scoring below this
            qualified_only: Drop contractors failing the checklist

        Returns:
            MatchResult list sorted by match score descending
        """
        results = []
        for contractor in contractors:
            qualification = self.qualify(contractor, phase)
            if qualified_only and not qualification.qualified:
                continue

            score = self.match_score(
                contractor.trades,
                phase.trades,
                contractor.rating,
                contractor.completed_projects,
            )
            if score < min_score:
                continue

            results.append(MatchResult(
                contractor_id=contractor.id,
                contractor_name=contractor.name,
                phase_id=phase.id,
                match_score=round(score, 1),
                qualification=qualification,
                match_reasons=[r.name for r in qualification.requirements if r.met],
            ))

        results.sort(key=lambda r: r.match_score, reverse=True)
        logger.info(f"Matched {len(results)} of {len(contractors)} contractors to phase {phase.id}")
        return results
