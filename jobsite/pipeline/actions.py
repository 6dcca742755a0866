"""
Next-action planner - role-conditioned to-do list.
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.dashboard import NextAction
from ..models.project import Bid, JobApplication, Milestone, Project
from .helpers import days_until, resolve_now


logger = logging.getLogger(__name__)

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

REVIEWER_ROLES = ("Project Manager", "Admin")
WORKER_ROLES = ("GC", "Subcontractor", "Trade Specialist")

DUE_SOON_DAYS = 7
URGENT_DAYS = 3


class NextActionPlanner:
    """Builds the prioritized action list for a user role."""

    def plan(
        self,
        role: str,
        projects: list[Project],
        milestones: list[Milestone],
        applications: list[JobApplication],
        bids: list[Bid],
        now: Optional[datetime] = None,
    ) -> list[NextAction]:
        """
        Plan next actions for a role.

        Reviewers (Project Manager, Admin) get review work; contractors
        (GC, Subcontractor, Trade Specialist) get delivery work. Other roles
        get nothing.

        Returns:
            NextAction list stably sorted by priority
        """
        now = resolve_now(now)
        projects_by_id = {p.id: p for p in projects}

        actions = []
        if role in REVIEWER_ROLES:
            actions.extend(self._reviewer_actions(projects_by_id, milestones, applications, bids))
        if role in WORKER_ROLES:
            actions.extend(self._worker_actions(projects_by_id, milestones, bids, now))

        actions = sorted(actions, key=lambda a: PRIORITY_ORDER[a.priority])
        logger.debug(f"Planned {len(actions)} actions for role {role}")
        return actions

    def _reviewer_actions(
        self,
        projects_by_id: dict[str, Project],
        milestones: list[Milestone],
        applications: list[JobApplication],
        bids: list[Bid],
    ) -> list[NextAction]:
        actions = []

        for milestone in milestones:
            if milestone.status != "pending_review":
                continue
            project = projects_by_id.get(milestone.project_id)
            if project is None:
                continue
            actions.append(NextAction(
                id=f"review-milestone-{milestone.id}",
                title="Review Milestone",
                description=f'"{milestone.title}" on {project.title}',
                action_url=f"/project-dashboard?id={project.id}",
                priority="high",
            ))

        pending = sum(1 for a in applications if a.status == "pending")
        if pending > 0:
            actions.append(NextAction(
                id="review-applications",
                title="Review Applications",
                description=f"{pending} applications need your attention",
                action_url="/jobs",
                priority="medium",
            ))

        for bid in bids:
            if bid.status in ("pending", "submitted") and bid.submitted_count > 0:
                actions.append(NextAction(
                    id=f"review-bids-{bid.id}",
                    title="Review Bid Submissions",
                    description=f'{bid.submitted_count} submissions for "{bid.project_name}"',
                    action_url=f"/bid-details?id={bid.id}",
                    priority="medium",
                ))

        return actions

    def _worker_actions(
        self,
        projects_by_id: dict[str, Project],
        milestones: list[Milestone],
        bids: list[Bid],
        now: datetime,
    ) -> list[NextAction]:
        actions = []

        for milestone in milestones:
            if milestone.status not in ("in_progress", "not_started"):
                continue
            project = projects_by_id.get(milestone.project_id)
            if project is None:
                continue
            days_left = days_until(milestone.due_date, now)
            if days_left <= DUE_SOON_DAYS:
                actions.append(NextAction(
                    id=f"complete-milestone-{milestone.id}",
                    title="Complete Milestone",
                    description=f'"{milestone.title}" due in {days_left} days',
                    action_url=f"/project-dashboard?id={project.id}",
                    priority="high" if days_left <= URGENT_DAYS else "medium",
                ))

        for milestone in milestones:
            if milestone.status != "needs_revision":
                continue
            project = projects_by_id.get(milestone.project_id)
            if project is None:
                continue
            actions.append(NextAction(
                id=f"revise-milestone-{milestone.id}",
                title="Revise Milestone",
                description=f'"{milestone.title}" needs revisions',
                action_url=f"/project-dashboard?id={project.id}",
                priority="high",
            ))

        for bid in bids:
            if bid.status != "pending":
                continue
            days_left = days_until(bid.due_date, now)
            if 0 <= days_left <= DUE_SOON_DAYS:
                actions.append(NextAction(
                    id=f"submit-bid-{bid.id}",
                    title="Submit Bid",
                    description=f'"{bid.project_name}" due in {days_left} days',
                    action_url=f"/bid-details?id={bid.id}",
                    priority="high" if days_left <= URGENT_DAYS else "low",
                ))

        return actions
