"""
Alert generator - threshold checks over projects, milestones, applications and appointments.
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.dashboard import AlertItem
from ..models.project import Appointment, JobApplication, Milestone, Project
from .helpers import days_since, days_until, hours_until, resolve_now, round_half_up


logger = logging.getLogger(__name__)

SEVERITY_ORDER = {"error": 0, "warning": 1, "info": 2, "success": 3}

DEADLINE_WARNING_DAYS = 7
BEHIND_SCHEDULE_WINDOW_DAYS = 30
BEHIND_SCHEDULE_COMPLETION = 50
REVIEW_STALL_DAYS = 3
PENDING_APPLICATIONS_LIMIT = 5
APPOINTMENT_REMINDER_HOURS = 24


def _project_url(project_id: str) -> str:
    return f"/project-dashboard?id={project_id}"


class AlertGenerator:
    """
    Scans records for deadline, overdue, and backlog conditions.
    Each call regenerates the full alert list; nothing is kept between calls.
    """

    def generate(
        self,
        projects: list[Project],
        milestones: list[Milestone],
        applications: list[JobApplication],
        appointments: list[Appointment],
        now: Optional[datetime] = None,
    ) -> list[AlertItem]:
        """
        Generate alerts, most severe first.

        Args:
            projects: Projects to check for deadlines and progress
            milestones: Milestones to check for stalled reviews and overdue work
            applications: Applications to check for backlog
            appointments: Appointments to remind about
            now: Reference time, defaults to the current UTC time

        Returns:
            AlertItem list stably sorted by severity
        """
        now = resolve_now(now)

        alerts = []
        alerts.extend(self._project_alerts(projects, now))
        alerts.extend(self._milestone_alerts(milestones, now))
        alerts.extend(self._application_alerts(applications, now))
        alerts.extend(self._appointment_alerts(appointments, now))

        # sorted() is stable, so input order holds within a severity
        alerts = sorted(alerts, key=lambda a: SEVERITY_ORDER[a.type])
        logger.info(f"Generated {len(alerts)} alerts")
        return alerts

    def _project_alerts(self, projects: list[Project], now: datetime) -> list[AlertItem]:
        alerts = []
        for project in projects:
            if project.status != "active":
                continue

            days_left = days_until(project.end_date, now)

            if 0 < days_left <= DEADLINE_WARNING_DAYS:
                alerts.append(AlertItem(
                    id=f"project-deadline-{project.id}",
                    type="warning",
                    title="Project Deadline Approaching",
                    message=f"{project.title} is due in {days_left} days",
                    action_url=_project_url(project.id),
                    created_at=now,
                ))
            elif days_left < 0:
                alerts.append(AlertItem(
                    id=f"project-overdue-{project.id}",
                    type="error",
                    title="Project Overdue",
                    message=f"{project.title} is {abs(days_left)} days overdue",
                    action_url=_project_url(project.id),
                    created_at=now,
                ))

            # Independent of the deadline checks above
            if (
                project.completion_percentage < BEHIND_SCHEDULE_COMPLETION
                and days_left <= BEHIND_SCHEDULE_WINDOW_DAYS
            ):
                alerts.append(AlertItem(
                    id=f"project-behind-{project.id}",
                    type="warning",
                    title="Project Behind Schedule",
                    message=f"{project.title} is only {project.completion_percentage:g}% complete",
                    action_url=_project_url(project.id),
                    created_at=now,
                ))
        return alerts

    def _milestone_alerts(self, milestones: list[Milestone], now: datetime) -> list[AlertItem]:
        alerts = []
        for milestone in milestones:
            if milestone.status == "pending_review" and milestone.submitted_at is not None:
                waiting = days_since(milestone.submitted_at, now)
                if waiting >= REVIEW_STALL_DAYS:
                    alerts.append(AlertItem(
                        id=f"milestone-review-{milestone.id}",
                        type="warning",
                        title="Milestone Awaiting Review",
                        message=f'"{milestone.title}" has been pending review for {waiting} days',
                        action_url=_project_url(milestone.project_id),
                        created_at=now,
                    ))

            if milestone.status == "in_progress":
                days_left = days_until(milestone.due_date, now)
                if days_left < 0:
                    alerts.append(AlertItem(
                        id=f"milestone-overdue-{milestone.id}",
                        type="error",
                        title="Milestone Overdue",
                        message=f'"{milestone.title}" is {abs(days_left)} days overdue',
                        action_url=_project_url(milestone.project_id),
                        created_at=now,
                    ))
        return alerts

    def _application_alerts(self, applications: list[JobApplication], now: datetime) -> list[AlertItem]:
        pending = sum(1 for a in applications if a.status == "pending")
        if pending <= PENDING_APPLICATIONS_LIMIT:
            return []
        return [AlertItem(
            id="applications-pending",
            type="info",
            title="Pending Applications",
            message=f"You have {pending} applications awaiting review",
            action_url="/jobs",
            created_at=now,
        )]

    def _appointment_alerts(self, appointments: list[Appointment], now: datetime) -> list[AlertItem]:
        alerts = []
        for appointment in appointments:
            if appointment.status != "scheduled":
                continue
            hours_left = hours_until(appointment.date, now)
            if 0 < hours_left <= APPOINTMENT_REMINDER_HOURS:
                alerts.append(AlertItem(
                    id=f"appointment-reminder-{appointment.id}",
                    type="info",
                    title="Upcoming Appointment",
                    message=f"{appointment.title} in {round_half_up(hours_left)} hours",
                    action_url=f"/appointment-details?id={appointment.id}",
                    created_at=now,
                ))
        return alerts
