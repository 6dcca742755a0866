"""
Dashboard models - aggregate statistics, alerts, and next actions.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

AlertType = Literal["warning", "info", "error", "success"]
ActionPriority = Literal["high", "medium", "low"]
HealthStatus = Literal["on_track", "at_risk", "behind", "ahead"]


class DashboardStats(BaseModel):
    """Portfolio-wide project statistics."""
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_revenue: float = Field(default=0, description="Paid amount over completed projects")
    pending_payments: float = Field(default=0, description="Unpaid amount over active projects")
    completion_rate: int = Field(default=0, description="Completed share of all projects, percent")
    avg_project_duration: int = Field(default=0, description="Average actual duration in days")


class WorkflowMetrics(BaseModel):
    """Counts across the job, bid, and milestone workflow."""
    jobs_posted: int = 0
    jobs_filled: int = 0
    applications_pending: int = 0
    applications_accepted: int = 0
    appointments_scheduled: int = 0
    bids_awarded: int = 0
    milestones_completed: int = 0
    milestones_total: int = 0


class FinancialSummary(BaseModel):
    """Money totals across projects."""
    total_contract: float = 0
    total_paid: float = 0
    escrow_held: float = 0
    remaining: float = 0


class ProjectHealth(BaseModel):
    """Schedule health of a single project."""
    status: HealthStatus
    reason: str


class AlertItem(BaseModel):
    """
    A derived advisory record. Regenerated on every call; the id is a
    deterministic key so callers can deduplicate.
    """
    id: str
    type: AlertType
    title: str
    message: str
    action_url: Optional[str] = None
    created_at: datetime


class NextAction(BaseModel):
    """A prioritized action for the current user."""
    id: str
    title: str
    description: str
    action_url: str
    priority: ActionPriority
