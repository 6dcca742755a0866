"""
Report orchestrator - runs every aggregation over one snapshot.
"""
import logging
import random
import uuid
from datetime import datetime
from typing import Optional

from ..config import get_config
from ..models.export import DashboardReport, MarketplaceSnapshot, ReportMetadata
from ..models.matching import MatchResult, TemplatePhase

from .actions import NextActionPlanner
from .alerts import AlertGenerator
from .dashboard import DashboardAggregator
from .helpers import resolve_now
from .matching import AutoMatcher
from .trust import TrustScorer


logger = logging.getLogger(__name__)


def build_report(
    snapshot: MarketplaceSnapshot,
    role: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DashboardReport:
    """
    Build the full dashboard report.

    Steps:
    1. Project statistics, workflow metrics and financial summary
    2. Project phases
    3. Alerts
    4. Next actions for the role
    5. Trust scores for every contractor

    Args:
        snapshot: Records to report on
        role: User role, defaults to the configured role
        now: Reference time for date-based checks

    Returns:
        DashboardReport with all results and metadata
    """
    config = get_config()
    role = role or config.report.default_role
    report_id = str(uuid.uuid4())[:8]
    started_at = resolve_now()
    now = resolve_now(now)

    logger.info(f"Starting report {report_id} for role {role}")

    aggregator = DashboardAggregator()
    alert_generator = AlertGenerator()
    planner = NextActionPlanner()
    scorer = TrustScorer()

    warnings = []

    # Step 1: Aggregates
    logger.info("Step 1: Aggregating project and workflow statistics")
    stats = aggregator.project_stats(snapshot.projects)
    workflow = aggregator.workflow_metrics(
        snapshot.jobs,
        snapshot.applications,
        snapshot.bids,
        snapshot.appointments,
        snapshot.milestones,
    )
    financials = aggregator.financial_summary(snapshot.projects)

    # Step 2: Phases
    logger.info("Step 2: Resolving project phases")
    phases = aggregator.project_phases(snapshot.projects, snapshot.milestones)

    known_projects = {p.id for p in snapshot.projects}
    orphans = [m.id for m in snapshot.milestones if m.project_id not in known_projects]
    if orphans:
        warnings.append(f"{len(orphans)} milestones reference unknown projects")
        logger.warning(f"Milestones without a project: {', '.join(orphans)}")

    # Step 3: Alerts
    logger.info("Step 3: Generating alerts")
    alerts = alert_generator.generate(
        snapshot.projects,
        snapshot.milestones,
        snapshot.applications,
        snapshot.appointments,
        now=now,
    )

    # Step 4: Next actions
    logger.info("Step 4: Planning next actions")
    actions = planner.plan(
        role,
        snapshot.projects,
        snapshot.milestones,
        snapshot.applications,
        snapshot.bids,
        now=now,
    )

    # Step 5: Trust
    contractor_trust = []
    if config.report.include_trust_scores:
        logger.info("Step 5: Scoring contractors")
        contractor_trust = scorer.evaluate_all(snapshot.contractors)

    metadata = ReportMetadata(
        report_id=report_id,
        role=role,
        started_at=started_at,
        completed_at=resolve_now(),
        contractors_scored=len(contractor_trust),
        projects_seen=len(snapshot.projects),
        milestones_seen=len(snapshot.milestones),
        warnings=warnings,
    )

    report = DashboardReport(
        metadata=metadata,
        stats=stats,
        workflow=workflow,
        financials=financials,
        alerts=alerts,
        next_actions=actions,
        contractor_trust=contractor_trust,
        project_phases=phases,
    )

    logger.info(f"Report {report_id} completed: {len(alerts)} alerts, {len(actions)} actions")
    return report


def match_phase(
    snapshot: MarketplaceSnapshot,
    phase: TemplatePhase,
    qualified_only: bool = False,
) -> list[MatchResult]:
    """
    Rank the snapshot's contractors for a template phase using configured matching.
    """
    config = get_config()
    rng = random.Random(config.matching.random_seed)
    matcher = AutoMatcher(rng=rng, jitter=config.matching.jitter_enabled)

    return matcher.rank(
        snapshot.contractors,
        phase,
        min_score=config.matching.min_score,
        qualified_only=qualified_only,
    )
