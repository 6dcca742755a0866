"""
Snapshot loading and report export as JSON files.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from .config import get_config
from .models.export import DashboardReport, MarketplaceSnapshot


logger = logging.getLogger(__name__)


def load_snapshot(path: Path) -> MarketplaceSnapshot:
    """
    Load and validate a snapshot file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the content does not match the models
    """
    path = Path(path)
    snapshot = MarketplaceSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.contractors)} contractors, "
        f"{len(snapshot.projects)} projects"
    )
    return snapshot


def export_report(
    report: DashboardReport,
    exports_dir: Optional[Path] = None,
    minimal: bool = False,
) -> Path:
    """
    Write a report to exports_dir/report_<id>.json.

    Returns:
        Path of the written file
    """
    if exports_dir is None:
        exports_dir = get_config().exports_dir
    exports_dir = Path(exports_dir)
    exports_dir.mkdir(parents=True, exist_ok=True)

    out_path = exports_dir / f"report_{report.metadata.report_id}.json"
    if minimal:
        out_path.write_text(json.dumps(report.to_minimal_export(), indent=2), encoding="utf-8")
    else:
        out_path.write_text(report.model_dump_json(indent=2), encoding="utf-8")

    logger.info(f"Exported report to {out_path}")
    return out_path
