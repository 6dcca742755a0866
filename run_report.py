#!/usr/bin/env python
"""
Run script for jobsite reports.
Use: python run_report.py snapshot.json --role "Project Manager"
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import get_args

from pydantic import ValidationError

from jobsite.config import get_config
from jobsite.models.project import UserRole
from jobsite.pipeline.orchestrator import build_report
from jobsite.pipeline.trust import trust_level_label
from jobsite.storage import export_report, load_snapshot


logger = logging.getLogger("jobsite")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build a dashboard report from a snapshot file.")
    parser.add_argument("snapshot", type=Path, help="Path to a snapshot JSON file")
    parser.add_argument(
        "--role", default=None, choices=get_args(UserRole), help="User role to plan next actions for"
    )
    parser.add_argument("--export", action="store_true", help="Write the report to the exports dir")
    parser.add_argument("--minimal", action="store_true", help="Export without breakdowns")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Build and print a report."""
    try:
        config = get_config()
    except ValidationError as e:
        logging.basicConfig()
        logger.error(f"Invalid configuration: {e}")
        return 1
    logging.basicConfig(level=config.logging.level.upper(), format=config.logging.format)
    args = parse_args(argv)

    try:
        snapshot = load_snapshot(args.snapshot)
    except FileNotFoundError:
        logger.error(f"Snapshot not found: {args.snapshot}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid snapshot {args.snapshot}: {e}")
        return 1

    report = build_report(snapshot, role=args.role)

    stats = report.stats
    print(f"Projects: {stats.total_projects} total, {stats.active_projects} active, "
          f"{stats.completion_rate}% completed")

    print(f"\nAlerts ({len(report.alerts)})")
    for alert in report.alerts:
        print(f"  [{alert.type}] {alert.title}: {alert.message}")

    print(f"\nNext actions ({len(report.next_actions)})")
    for action in report.next_actions:
        print(f"  [{action.priority}] {action.title}: {action.description}")

    print(f"\nContractors ({len(report.contractor_trust)})")
    for entry in report.contractor_trust:
        label = trust_level_label(entry.trust.level)
        print(f"  {entry.contractor_name or entry.contractor_id}: {entry.trust.score} ({label})")

    if args.export:
        path = export_report(report, minimal=args.minimal)
        print(f"\nExported to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
