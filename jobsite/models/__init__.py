"""
Pydantic models for jobsite.
All data contracts are defined here for strict validation.
"""

from .contractor import Contractor, TrustIndicators, Verification
from .project import Appointment, Bid, Job, JobApplication, Milestone, Project
from .trust import ContractorTrust, TrustScore
from .dashboard import (
    AlertItem,
    DashboardStats,
    FinancialSummary,
    NextAction,
    ProjectHealth,
    WorkflowMetrics,
)
from .matching import (
    ContractorQualification,
    MatchResult,
    QualificationRequirement,
    TemplatePhase,
)
from .export import DashboardReport, MarketplaceSnapshot, ReportMetadata

__all__ = [
    # Contractor
    "Contractor",
    "TrustIndicators",
    "Verification",
    # Project
    "Appointment",
    "Bid",
    "Job",
    "JobApplication",
    "Milestone",
    "Project",
    # Trust
    "ContractorTrust",
    "TrustScore",
    # Dashboard
    "AlertItem",
    "DashboardStats",
    "FinancialSummary",
    "NextAction",
    "ProjectHealth",
    "WorkflowMetrics",
    # Matching
    "ContractorQualification",
    "MatchResult",
    "QualificationRequirement",
    "TemplatePhase",
    # Export
    "DashboardReport",
    "MarketplaceSnapshot",
    "ReportMetadata",
]
