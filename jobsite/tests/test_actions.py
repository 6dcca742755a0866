"""
Tests for next-action planning.
"""
from datetime import datetime, timedelta, timezone

import pytest

from jobsite.models.project import Bid, JobApplication, Milestone, Project
from jobsite.pipeline.actions import NextActionPlanner

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _milestone(milestone_id: str, status: str, due_in_days: float = 30, project_id: str = "p1") -> Milestone:
    return Milestone(
        id=milestone_id,
        project_id=project_id,
        title=f"Milestone {milestone_id}",
        status=status,
        due_date=NOW + timedelta(days=due_in_days),
    )


def _bid(bid_id: str, status: str, due_in_days: float = 30, submitted: int = 0) -> Bid:
    return Bid(
        id=bid_id,
        project_name=f"Bid {bid_id}",
        status=status,
        due_date=NOW + timedelta(days=due_in_days),
        submitted_count=submitted,
    )


class TestNextActionPlanner:
    """Tests for NextActionPlanner."""

    @pytest.fixture
    def projects(self) -> list[Project]:
        return [
            Project(
                id="p1",
                title="Harbor Clinic",
                status="active",
                start_date=NOW - timedelta(days=30),
                end_date=NOW + timedelta(days=60),
            )
        ]

    def _plan(self, role, projects, milestones=(), applications=(), bids=()):
        return NextActionPlanner().plan(
            role, projects, list(milestones), list(applications), list(bids), now=NOW
        )

    @pytest.mark.parametrize("role", ["Project Manager", "Admin"])
    def test_reviewer_actions(self, role, projects):
        milestones = [_milestone("m1", "pending_review")]
        applications = [
            JobApplication(id="a1", job_id="j1", status="pending"),
            JobApplication(id="a2", job_id="j1", status="pending"),
        ]
        bids = [
            _bid("b1", "submitted", submitted=3),
            _bid("b2", "pending", submitted=0),
            _bid("b3", "awarded", submitted=4),
        ]

        actions = self._plan(role, projects, milestones, applications, bids)

        assert [a.id for a in actions] == [
            "review-milestone-m1",
            "review-applications",
            "review-bids-b1",
        ]
        assert [a.priority for a in actions] == ["high", "medium", "medium"]
        assert actions[0].description == '"Milestone m1" on Harbor Clinic'
        assert actions[1].description == "2 applications need your attention"
        assert actions[2].description == '3 submissions for "Bid b1"'

    def test_reviewer_skips_unknown_project(self, projects):
        milestones = [_milestone("m1", "pending_review", project_id="missing")]
        assert self._plan("Admin", projects, milestones) == []

    @pytest.mark.parametrize("role", ["GC", "Subcontractor", "Trade Specialist"])
    def test_worker_actions(self, role, projects):
        milestones = [
            _milestone("m1", "in_progress", due_in_days=2),
            _milestone("m2", "not_started", due_in_days=5),
            _milestone("m3", "in_progress", due_in_days=10),
            _milestone("m4", "needs_revision"),
        ]
        bids = [
            _bid("b1", "pending", due_in_days=2),
            _bid("b2", "pending", due_in_days=5),
            _bid("b3", "pending", due_in_days=-1),
            _bid("b4", "submitted", due_in_days=2),
        ]

        actions = self._plan(role, projects, milestones, bids=bids)

        assert [a.id for a in actions] == [
            "complete-milestone-m1",
            "revise-milestone-m4",
            "submit-bid-b1",
            "complete-milestone-m2",
            "submit-bid-b2",
        ]
        assert [a.priority for a in actions] == ["high", "high", "high", "medium", "low"]
        assert actions[0].description == '"Milestone m1" due in 2 days'

    def test_overdue_milestone_is_high(self, projects):
        actions = self._plan("GC", projects, [_milestone("m1", "in_progress", due_in_days=-4)])

        assert len(actions) == 1
        assert actions[0].priority == "high"
        assert actions[0].description == '"Milestone m1" due in -4 days'

    def test_worker_does_not_see_reviews(self, projects):
        applications = [JobApplication(id="a1", job_id="j1", status="pending")]
        milestones = [_milestone("m1", "pending_review")]
        assert self._plan("Subcontractor", projects, milestones, applications) == []

    def test_viewer_gets_nothing(self, projects):
        milestones = [_milestone("m1", "pending_review"), _milestone("m2", "in_progress", due_in_days=1)]
        assert self._plan("Viewer", projects, milestones) == []

    def test_priority_sort_is_stable(self, projects):
        milestones = [_milestone(f"m{i}", "needs_revision") for i in range(4)]
        actions = self._plan("GC", projects, milestones)
        assert [a.id for a in actions] == [f"revise-milestone-m{i}" for i in range(4)]
