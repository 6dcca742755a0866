"""
Dashboard aggregator - portfolio statistics over project and workflow records.
"""
import logging
from datetime import datetime
from typing import Optional

import numpy as np

from ..models.dashboard import (
    DashboardStats,
    FinancialSummary,
    ProjectHealth,
    WorkflowMetrics,
)
from ..models.project import Appointment, Bid, Job, JobApplication, Milestone, Project
from .helpers import days_between, resolve_now, round_half_up


logger = logging.getLogger(__name__)

# Fixed labels for statuses that short-circuit the milestone-based phase
STATUS_PHASES = {
    "setup": "Setup",
    "completed": "Completed",
    "cancelled": "Cancelled",
    "on_hold": "On Hold",
}


class DashboardAggregator:
    """
    Aggregates project and workflow records into dashboard numbers.
    Inputs are never mutated; empty inputs yield zeros, never NaN.
    """

    def project_stats(self, projects: list[Project]) -> DashboardStats:
        """
        Calculate portfolio statistics.

        Args:
            projects: All projects visible to the user

        Returns:
            DashboardStats with counts, money totals, rate and average duration
        """
        total = len(projects)
        active = [p for p in projects if p.status == "active"]
        completed = [p for p in projects if p.status == "completed"]

        total_revenue = sum(p.paid_amount for p in completed)
        pending_payments = sum(p.total_amount - p.paid_amount for p in active)

        completion_rate = round_half_up(len(completed) / total * 100) if total > 0 else 0

        # Only projects with both actual dates count towards the average
        durations = [
            round_half_up(days_between(p.actual_start_date, p.actual_end_date))
            for p in projects
            if p.actual_start_date is not None and p.actual_end_date is not None
        ]
        avg_duration = round_half_up(float(np.mean(durations))) if durations else 0

        return DashboardStats(
            total_projects=total,
            active_projects=len(active),
            completed_projects=len(completed),
            total_revenue=total_revenue,
            pending_payments=pending_payments,
            completion_rate=completion_rate,
            avg_project_duration=avg_duration,
        )

    def workflow_metrics(
        self,
        jobs: list[Job],
        applications: list[JobApplication],
        bids: list[Bid],
        appointments: list[Appointment],
        milestones: list[Milestone],
    ) -> WorkflowMetrics:
        """Count records at each workflow stage."""
        return WorkflowMetrics(
            jobs_posted=len(jobs),
            jobs_filled=sum(1 for j in jobs if j.status in ("in_progress", "completed")),
            applications_pending=sum(1 for a in applications if a.status == "pending"),
            applications_accepted=sum(1 for a in applications if a.status == "accepted"),
            appointments_scheduled=sum(1 for a in appointments if a.status == "scheduled"),
            bids_awarded=sum(1 for b in bids if b.status == "awarded"),
            milestones_completed=sum(1 for m in milestones if m.status == "approved"),
            milestones_total=len(milestones),
        )

    def financial_summary(self, projects: list[Project]) -> FinancialSummary:
        total_contract = sum(p.total_amount for p in projects)
        total_paid = sum(p.paid_amount for p in projects)
        return FinancialSummary(
            total_contract=total_contract,
            total_paid=total_paid,
            escrow_held=sum(p.escrow_balance for p in projects),
            remaining=total_contract - total_paid,
        )

    def project_phase(self, project: Project, milestones: list[Milestone]) -> str:
        """
        Human-readable construction phase of a project.

        Status decides the phase for non-active projects; otherwise the share
        of approved milestones does.
        """
        if project.status in STATUS_PHASES:
            return STATUS_PHASES[project.status]

        project_milestones = [m for m in milestones if m.project_id == project.id]
        if not project_milestones:
            return "Planning"

        approved = sum(1 for m in project_milestones if m.status == "approved")
        percent = approved / len(project_milestones) * 100

        if percent == 0:
            return "Getting Started"
        if percent < 33:
            return "Early Stage"
        if percent < 66:
            return "Mid Construction"
        if percent < 100:
            return "Final Stage"
        return "Final Inspection"

    def project_health(self, project: Project, now: Optional[datetime] = None) -> ProjectHealth:
        """Compare actual progress with the share of the schedule already elapsed."""
        if project.status != "active":
            return ProjectHealth(status="on_track", reason="Project not active")

        now = resolve_now(now)
        total_days = days_between(project.start_date, project.end_date)
        elapsed_days = days_between(project.start_date, now)

        if total_days > 0:
            expected = elapsed_days / total_days * 100
        else:
            expected = 100.0

        variance = project.completion_percentage - expected

        if variance >= 10:
            return ProjectHealth(status="ahead", reason="Project ahead of schedule")
        if variance >= -10:
            return ProjectHealth(status="on_track", reason="Project on schedule")
        if variance >= -20:
            return ProjectHealth(status="at_risk", reason="Project slightly behind schedule")
        return ProjectHealth(status="behind", reason="Project significantly behind schedule")

    def project_phases(self, projects: list[Project], milestones: list[Milestone]) -> dict[str, str]:
        """Phase label for every project, keyed by project id."""
        return {p.id: self.project_phase(p, milestones) for p in projects}
