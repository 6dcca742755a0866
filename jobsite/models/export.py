"""
Export models - input snapshot, report metadata, and the full report structure.
"""
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from .contractor import Contractor
from .dashboard import (
    AlertItem,
    DashboardStats,
    FinancialSummary,
    NextAction,
    WorkflowMetrics,
)
from .project import Appointment, Bid, Job, JobApplication, Milestone, Project, UserRole
from .trust import ContractorTrust


class MarketplaceSnapshot(BaseModel):
    """
    Everything the stores hold at one moment.
    Already validated and persisted upstream; consumed read-only.
    """
    contractors: list[Contractor] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)
    applications: list[JobApplication] = Field(default_factory=list)
    bids: list[Bid] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)


class ReportMetadata(BaseModel):
    """Metadata for a report run."""
    report_id: str = Field(description="Unique report identifier")
    role: UserRole
    started_at: datetime
    completed_at: Optional[datetime] = None

    # Input sizes
    contractors_scored: int = 0
    projects_seen: int = 0
    milestones_seen: int = 0

    # Schema version
    schema_version: str = "1.0.0"

    warnings: list[str] = Field(default_factory=list)


class DashboardReport(BaseModel):
    """
    Complete dashboard report for one snapshot and role.
    """
    metadata: ReportMetadata
    stats: DashboardStats
    workflow: WorkflowMetrics
    financials: FinancialSummary
    alerts: list[AlertItem] = Field(default_factory=list)
    next_actions: list[NextAction] = Field(default_factory=list)
    contractor_trust: list[ContractorTrust] = Field(default_factory=list)

    # Project id -> phase label
    project_phases: dict[str, str] = Field(default_factory=dict)

    def to_minimal_export(self) -> dict[str, Any]:
        """Export minimal version without breakdowns."""
        return {
            "metadata": {
                "report_id": self.metadata.report_id,
                "role": self.metadata.role,
                "exported_at": datetime.now(timezone.utc).isoformat(),
            },
            "alerts": [
                {"id": a.id, "type": a.type, "title": a.title, "message": a.message}
                for a in self.alerts
            ],
            "next_actions": [
                {"title": a.title, "description": a.description, "priority": a.priority}
                for a in self.next_actions
            ],
            "trust": [
                {"contractor_id": t.contractor_id, "score": t.trust.score, "level": t.trust.level}
                for t in self.contractor_trust
            ],
        }
