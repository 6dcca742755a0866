"""
Tests for the report orchestrator, snapshot storage, and the run script.
"""
import json
from datetime import datetime, timedelta, timezone

import pytest

from jobsite.models.contractor import Contractor, Verification
from jobsite.models.export import MarketplaceSnapshot
from jobsite.models.matching import TemplatePhase
from jobsite.models.project import Appointment, Bid, JobApplication, Milestone, Project
from jobsite.pipeline.alerts import SEVERITY_ORDER
from jobsite.pipeline.orchestrator import build_report, match_phase
from jobsite.storage import export_report, load_snapshot

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_snapshot() -> MarketplaceSnapshot:
    return MarketplaceSnapshot(
        contractors=[
            Contractor(id="c-new", name="New Co"),
            Contractor(
                id="c-pro",
                name="Pro Build",
                trade="Electrical",
                rating=4.8,
                review_count=80,
                completed_projects=120,
                verifications=[
                    Verification(type=t, verified=True)
                    for t in ("identity", "license", "insurance", "background")
                ],
            ),
        ],
        projects=[
            Project(
                id="p1",
                title="Harbor Clinic",
                status="active",
                start_date=NOW - timedelta(days=90),
                end_date=NOW + timedelta(days=5),
                total_amount=50000,
                paid_amount=20000,
                completion_percentage=30,
            ),
            Project(
                id="p2",
                title="Depot",
                status="completed",
                start_date=NOW - timedelta(days=200),
                end_date=NOW - timedelta(days=100),
                actual_start_date=NOW - timedelta(days=200),
                actual_end_date=NOW - timedelta(days=100),
                total_amount=10000,
                paid_amount=10000,
                completion_percentage=100,
            ),
        ],
        milestones=[
            Milestone(
                id="m1",
                project_id="p1",
                title="Framing",
                status="pending_review",
                due_date=NOW,
                submitted_at=NOW - timedelta(days=4),
            ),
            Milestone(
                id="m2",
                project_id="p1",
                title="Rough-in",
                status="in_progress",
                due_date=NOW - timedelta(days=1),
            ),
            Milestone(
                id="m3",
                project_id="gone",
                title="Orphan",
                status="approved",
                due_date=NOW,
            ),
        ],
        applications=[JobApplication(id="a1", job_id="j1", status="pending")],
        bids=[
            Bid(
                id="b1",
                project_name="Harbor Clinic",
                status="submitted",
                due_date=NOW + timedelta(days=3),
                submitted_count=2,
            )
        ],
        appointments=[
            Appointment(id="ap1", title="Walkthrough", status="scheduled", date=NOW + timedelta(hours=3)),
        ],
    )


class TestBuildReport:
    """Tests for build_report."""

    def test_report_contents(self, sample_snapshot):
        report = build_report(sample_snapshot, role="Project Manager", now=NOW)

        assert report.stats.total_projects == 2
        assert report.stats.completion_rate == 50
        assert report.stats.avg_project_duration == 100
        assert report.financials.remaining == 30000
        assert report.workflow.milestones_total == 3
        assert report.project_phases == {"p1": "Getting Started", "p2": "Completed"}

    def test_alerts_sorted(self, sample_snapshot):
        report = build_report(sample_snapshot, role="Project Manager", now=NOW)

        ids = [a.id for a in report.alerts]
        assert ids == [
            "milestone-overdue-m2",
            "project-deadline-p1",
            "project-behind-p1",
            "milestone-review-m1",
            "appointment-reminder-ap1",
        ]
        severities = [SEVERITY_ORDER[a.type] for a in report.alerts]
        assert severities == sorted(severities)

    def test_actions_follow_role(self, sample_snapshot):
        manager = build_report(sample_snapshot, role="Project Manager", now=NOW)
        contractor = build_report(sample_snapshot, role="GC", now=NOW)

        assert [a.id for a in manager.next_actions] == [
            "review-milestone-m1",
            "review-applications",
            "review-bids-b1",
        ]
        assert [a.id for a in contractor.next_actions] == ["complete-milestone-m2"]

    def test_trust_scores_best_first(self, sample_snapshot):
        report = build_report(sample_snapshot, role="Admin", now=NOW)

        assert [t.contractor_id for t in report.contractor_trust] == ["c-pro", "c-new"]
        assert report.metadata.contractors_scored == 2

    def test_metadata(self, sample_snapshot):
        report = build_report(sample_snapshot, role="Admin", now=NOW)

        assert report.metadata.role == "Admin"
        assert report.metadata.projects_seen == 2
        assert report.metadata.milestones_seen == 3
        assert report.metadata.completed_at >= report.metadata.started_at
        assert report.metadata.warnings == ["1 milestones reference unknown projects"]

    def test_timestamps_are_utc(self, sample_snapshot):
        report = build_report(sample_snapshot, role="Admin", now=NOW)

        assert report.metadata.started_at.utcoffset() == timedelta(0)
        assert report.metadata.completed_at.utcoffset() == timedelta(0)
        # Mixing naive and aware datetimes would raise TypeError here
        assert isinstance(report.metadata.completed_at - report.alerts[0].created_at, timedelta)
        exported_at = datetime.fromisoformat(report.to_minimal_export()["metadata"]["exported_at"])
        assert exported_at.utcoffset() == timedelta(0)

    def test_empty_snapshot(self):
        report = build_report(MarketplaceSnapshot(), role="Viewer", now=NOW)

        assert report.stats.total_projects == 0
        assert report.alerts == []
        assert report.next_actions == []
        assert report.contractor_trust == []

    def test_minimal_export(self, sample_snapshot):
        minimal = build_report(sample_snapshot, role="Admin", now=NOW).to_minimal_export()

        assert minimal["metadata"]["role"] == "Admin"
        assert len(minimal["alerts"]) == 5
        assert minimal["trust"][0]["contractor_id"] == "c-pro"


class TestMatchPhase:
    """Tests for configured matching."""

    def test_ranks_snapshot_contractors(self, sample_snapshot):
        phase = TemplatePhase(id="ph1", trades=["Electrical"])
        results = match_phase(sample_snapshot, phase)

        assert results[0].contractor_id == "c-pro"
        assert all(0 <= r.match_score <= 100 for r in results)

    def test_qualified_only(self, sample_snapshot):
        phase = TemplatePhase(id="ph1", trades=["Electrical"])
        results = match_phase(sample_snapshot, phase, qualified_only=True)
        assert [r.contractor_id for r in results] == ["c-pro"]


class TestStorage:
    """Tests for snapshot loading and report export."""

    def test_load_snapshot(self, sample_snapshot, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(sample_snapshot.model_dump_json(), encoding="utf-8")

        loaded = load_snapshot(path)
        assert loaded.model_dump() == sample_snapshot.model_dump()

    def test_load_missing_snapshot(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "missing.json")

    def test_export_report(self, sample_snapshot, tmp_path):
        report = build_report(sample_snapshot, role="Admin", now=NOW)
        path = export_report(report, exports_dir=tmp_path / "exports")

        assert path.name == f"report_{report.metadata.report_id}.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["stats"]["total_projects"] == 2

    def test_export_minimal(self, sample_snapshot, tmp_path):
        report = build_report(sample_snapshot, role="Admin", now=NOW)
        path = export_report(report, exports_dir=tmp_path, minimal=True)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"metadata", "alerts", "next_actions", "trust"}


class TestRunScript:
    """Tests for the command-line runner."""

    def test_main_prints_report(self, sample_snapshot, tmp_path, capsys):
        from run_report import main

        path = tmp_path / "snapshot.json"
        path.write_text(sample_snapshot.model_dump_json(), encoding="utf-8")

        assert main([str(path), "--role", "Admin"]) == 0
        out = capsys.readouterr().out
        assert "Alerts (" in out
        assert "Pro Build" in out

    def test_main_missing_file(self, tmp_path):
        from run_report import main

        assert main([str(tmp_path / "nope.json")]) == 1

    def test_main_invalid_snapshot(self, tmp_path):
        from run_report import main

        path = tmp_path / "bad.json"
        path.write_text('{"projects": [{"id": "p1"}]}', encoding="utf-8")
        assert main([str(path)]) == 1

    def test_main_invalid_role_in_env(self, sample_snapshot, tmp_path, monkeypatch):
        from jobsite import config as config_module
        from run_report import main

        monkeypatch.setattr(config_module, "_config", None)
        monkeypatch.setenv("JOBSITE_ROLE", "Owner")
        path = tmp_path / "snapshot.json"
        path.write_text(sample_snapshot.model_dump_json(), encoding="utf-8")

        assert main([str(path)]) == 1
