from __future__ import annotations

import json
from pathlib import Path

from .analysis_report import ReportModel, report_to_dict
from .models import BatchResult


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def report_json(report: ReportModel, batch: BatchResult | None = None) -> str:
    data = report_to_dict(report)
    if batch is not None and batch.failures:
        data["skipped_repos"] = [{"path": p, "error": e} for p, e in batch.failures]
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=False)


def write_json(path: Path, text: str) -> None:
    ensure_dir(path.parent)
    path.write_text(text + "\n", encoding="utf-8")
