"""
Project models - projects, milestones, jobs, applications, bids, and appointments.
These are read-only snapshots; their lifecycle is owned by the marketplace stores.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

UserRole = Literal["Admin", "GC", "Subcontractor", "Trade Specialist", "Project Manager", "Viewer"]

ProjectStatus = Literal["setup", "active", "on_hold", "completed", "cancelled"]
MilestoneStatus = Literal[
    "not_started", "in_progress", "pending_review", "approved", "needs_revision", "rejected"
]
JobStatus = Literal["open", "in_progress", "completed", "cancelled"]
ApplicationStatus = Literal["pending", "accepted", "rejected", "withdrawn"]
BidStatus = Literal["pending", "submitted", "awarded", "declined"]
AppointmentStatus = Literal["scheduled", "completed", "cancelled", "no_show"]


class Project(BaseModel):
    """A contracted project between an owner and a contractor."""
    id: str
    title: str
    status: ProjectStatus
    owner_id: Optional[str] = None
    contractor_id: Optional[str] = None
    start_date: datetime
    end_date: datetime
    actual_start_date: Optional[datetime] = None
    actual_end_date: Optional[datetime] = None
    total_amount: float = Field(default=0, ge=0)
    paid_amount: float = Field(default=0, ge=0)
    escrow_balance: float = Field(default=0, ge=0)
    completion_percentage: float = Field(default=0, ge=0, le=100)


class Milestone(BaseModel):
    """A payable unit of project work with its own approval lifecycle."""
    id: str
    project_id: str
    title: str
    status: MilestoneStatus
    due_date: datetime
    payment_amount: float = Field(default=0, ge=0)
    order_number: int = 0
    submitted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    revision_count: int = Field(default=0, ge=0)


class Job(BaseModel):
    """A posted job."""
    id: str
    title: str
    status: JobStatus
    trade: str = ""
    start_date: Optional[datetime] = None
    applications_count: int = Field(default=0, ge=0)


class JobApplication(BaseModel):
    """An application to a posted job."""
    id: str
    job_id: str
    status: ApplicationStatus
    applicant_id: Optional[str] = None
    applicant_role: Optional[UserRole] = None
    applied_at: Optional[datetime] = None


class Bid(BaseModel):
    """A bid request with its submission count."""
    id: str
    project_name: str
    status: BidStatus
    due_date: datetime
    contractor_count: int = Field(default=0, ge=0)
    submitted_count: int = Field(default=0, ge=0)


class Appointment(BaseModel):
    """An estimate, site visit, or meeting."""
    id: str
    title: str
    status: AppointmentStatus
    date: datetime
    type: Literal["estimate", "site_visit", "meeting"] = "meeting"
    contractor_id: Optional[str] = None
    location: str = ""
