"""Pipeline modules for scoring and dashboard aggregation."""

from .trust import TrustScorer
from .dashboard import DashboardAggregator
from .alerts import AlertGenerator
from .actions import NextActionPlanner
from .matching import AutoMatcher
from .orchestrator import build_report, match_phase

__all__ = [
    "TrustScorer",
    "DashboardAggregator",
    "AlertGenerator",
    "NextActionPlanner",
    "AutoMatcher",
    "build_report",
    "match_phase",
]
