"""
Trust scoring - deterministic contractor trust score with transparent breakdown.
"""
import logging
import math
from typing import Optional

from ..models.contractor import Contractor, TrustIndicators, Verification
from ..models.trust import ContractorTrust, TrustLevel, TrustScore
from .helpers import round_half_up


logger = logging.getLogger(__name__)

# Scores used when data is missing
DEFAULT_VERIFICATION_FLOOR = 20
DEFAULT_RELIABILITY_SCORE = 50

VERIFICATION_WEIGHTS: dict[str, int] = {
    "identity": 10,
    "license": 25,
    "insurance": 25,
    "background": 15,
    "references": 15,
    "payment": 10,
}

# (upper bound inclusive, points); response time is measured in hours
RESPONSE_TIME_STEPS = ((2, 20), (6, 15), (12, 10))
RESPONSE_TIME_FALLBACK = 5
DISPUTE_RATE_STEPS = ((2, 10), (5, 7), (10, 4))
DISPUTE_RATE_FALLBACK = 0

TRUST_LEVEL_THRESHOLDS: tuple[tuple[int, TrustLevel], ...] = (
    (85, "excellent"),
    (70, "good"),
    (50, "fair"),
)

TRUST_LEVEL_COLORS: dict[str, str] = {
    "excellent": "#10B981",
    "good": "#3B82F6",
    "fair": "#F59E0B",
    "poor": "#EF4444",
}

TRUST_LEVEL_LABELS: dict[str, str] = {
    "excellent": "Excellent",
    "good": "Good",
    "fair": "Fair",
    "poor": "Needs Improvement",
}

VERIFICATION_LABELS: dict[str, str] = {
    "identity": "Identity Verified",
    "license": "Licensed",
    "insurance": "Insured",
    "background": "Background Checked",
    "references": "References Verified",
    "payment": "Payment Verified",
}


def _stepped(value: float, steps: tuple[tuple[float, int], ...], fallback: int) -> int:
    for bound, points in steps:
        if value <= bound:
            return points
    return fallback


def trust_level_for(score: float) -> TrustLevel:
    """Map a score to its trust level."""
    for threshold, level in TRUST_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return "poor"


def trust_level_label(level: str) -> str:
    return TRUST_LEVEL_LABELS[level]


def trust_level_color(level: str) -> str:
    return TRUST_LEVEL_COLORS[level]


def verification_label(verification_type: str) -> Optional[str]:
    """Display label for a verification type, None for unknown types."""
    return VERIFICATION_LABELS.get(verification_type)


class TrustScorer:
    """
    Deterministic trust scorer with transparent breakdown.
    All scores are 0-100, higher is better.
    """

    def __init__(
        self,
        verification_weight: float = 0.40,
        performance_weight: float = 0.30,
        reliability_weight: float = 0.30,
    ):
        total = verification_weight + performance_weight + reliability_weight
        if not math.isclose(total, 1.0):
            raise ValueError(f"Trust weights must sum to 1.0, got {total}")
        self.verification_weight = verification_weight
        self.performance_weight = performance_weight
        self.reliability_weight = reliability_weight

    def score(self, contractor: Contractor) -> TrustScore:
        """
        Calculate the full trust score for a contractor.

        Args:
            contractor: The contractor to score

        Returns:
            TrustScore with the aggregate and all components
        """
        verification = self.verification_score(contractor.verifications)
        performance = self.performance_score(contractor)
        reliability = self.reliability_score(contractor.trust_indicators)

        total = round_half_up(
            verification * self.verification_weight
            + performance * self.performance_weight
            + reliability * self.reliability_weight
        )
        total = max(0, min(100, total))

        return TrustScore(
            score=total,
            level=trust_level_for(total),
            verification_score=verification,
            performance_score=performance,
            reliability_score=reliability,
        )

    def verification_score(self, verifications: list[Verification]) -> int:
        """Share of the verification weight table that is verified."""
        if not verifications:
            return DEFAULT_VERIFICATION_FLOOR

        # Last record of each type wins
        by_type = {v.type: v for v in verifications}

        earned = 0
        max_score = 0
        for verification_type, weight in VERIFICATION_WEIGHTS.items():
            max_score += weight
            verification = by_type.get(verification_type)
            if verification is not None and verification.verified:
                earned += weight

        return round_half_up(earned / max_score * 100)

    def performance_score(self, contractor: Contractor) -> int:
        """Rating plus capped bonuses for reviews, projects, tenure and specialties."""
        score = contractor.rating / 5 * 40
        score += min(contractor.review_count / 10, 10)
        score += min(contractor.completed_projects / 20, 20)
        score += min(contractor.years_in_business / 2, 15)
        score += min(len(contractor.specialties) * 3, 15)

        # Per-term caps sum to 100
        return max(0, min(100, round_half_up(score)))

    def reliability_score(self, indicators: Optional[TrustIndicators]) -> int:
        """Weighted behavioural indicators; neutral when none are recorded."""
        if indicators is None:
            return DEFAULT_RELIABILITY_SCORE

        score = indicators.response_rate / 100 * 25
        score += _stepped(indicators.response_time, RESPONSE_TIME_STEPS, RESPONSE_TIME_FALLBACK)
        score += indicators.on_time_rate / 100 * 30
        score += indicators.repeat_client_rate / 100 * 15
        score += _stepped(indicators.dispute_rate, DISPUTE_RATE_STEPS, DISPUTE_RATE_FALLBACK)

        return max(0, min(100, round_half_up(score)))

    def suggestions(self, contractor: Contractor, trust: Optional[TrustScore] = None) -> list[str]:
        """
        Advisory strings for someone deciding whether to hire the contractor.

        Every matching rule fires; the order is the display priority.
        """
        if trust is None:
            trust = self.score(contractor)

        suggestions = []

        if trust.score >= 85:
            suggestions.append("Top rated contractor with excellent track record")

        if not contractor.is_verified("license"):
            suggestions.append("Request to see license documentation")

        if not contractor.is_verified("insurance"):
            suggestions.append("Confirm insurance coverage before hiring")

        if contractor.rating >= 4.8 and contractor.review_count >= 50:
            suggestions.append("Highly rated by clients with consistent feedback")

        indicators = contractor.trust_indicators
        if indicators is not None:
            if indicators.response_time <= 2:
                suggestions.append("Responds quickly to inquiries (avg. within 2 hours)")
            if indicators.on_time_rate >= 95:
                suggestions.append("Excellent track record for on-time project completion")
            if indicators.repeat_client_rate >= 50:
                suggestions.append("More than half of clients return for additional work")

        if contractor.completed_projects >= 100:
            suggestions.append("Experienced professional with extensive project history")

        if contractor.years_in_business >= 10:
            suggestions.append(
                f"Established business with {contractor.years_in_business:g}+ years experience"
            )

        if len(contractor.verifications) >= 4:
            suggestions.append("Comprehensive verification completed")

        if trust.score < 70:
            suggestions.append("Consider requesting additional references")
            suggestions.append("Request proof of current insurance coverage")

        return suggestions

    def evaluate(self, contractor: Contractor) -> ContractorTrust:
        """Score a contractor and attach suggestions."""
        trust = self.score(contractor)
        logger.debug(f"Contractor {contractor.id} trust {trust.score} ({trust.level})")
        return ContractorTrust(
            contractor_id=contractor.id,
            contractor_name=contractor.name,
            trust=trust,
            suggestions=self.suggestions(contractor, trust),
        )

    def evaluate_all(self, contractors: list[Contractor]) -> list[ContractorTrust]:
        """
        Score every contractor, best first.

        Args:
            contractors: Contractors to score

        Returns:
            ContractorTrust list sorted by score descending
        """
        results = [self.evaluate(c) for c in contractors]
        results.sort(key=lambda r: r.trust.score, reverse=True)
        logger.info(f"Scored {len(results)} contractors")
        return results
