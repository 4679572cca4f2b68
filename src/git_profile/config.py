from __future__ import annotations

import dataclasses
import json
import re
from pathlib import Path

from .models import HeuristicsConfig

DEFAULT_EXCLUDE_DIRNAMES = frozenset(
    {
        ".git",
        ".venv",
        "node_modules",
        ".next",
        "vendor",
        "dist",
        "build",
        "target",
        ".cache",
        ".vscode",
        ".idea",
        ".pytest_cache",
        "__pycache__",
    }
)

_LABEL_KEYS = {
    "midnight_commits": "label_midnight_fraction",
    "interweaving_score": "label_interweaving",
    "sole_maintenance_index": "label_sole_maintenance",
    "innovation_ratio": "label_innovation",
    "tech_breadth": "label_tech_breadth",
    "refinement_impact": "label_refinement",
    "longest_day_span": "label_longest_day_span",
    "code_health_index": "label_code_health",
}

_RADAR_KEYS = {
    "active_commits": "radar_active_commits",
    "active_lines": "radar_active_lines",
}


def load_config(config_path: Path | None) -> dict:
    if config_path is None or not config_path.exists():
        return {}
    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")
    return data


def heuristics_from_config(config: dict, *, sample_files: int | None = None) -> HeuristicsConfig:
    base = HeuristicsConfig()
    overrides: dict[str, object] = {}

    labels = config.get("label_thresholds") or {}
    if isinstance(labels, dict):
        for key, field in _LABEL_KEYS.items():
            if key in labels:
                overrides[field] = float(labels[key])

    radar = config.get("radar_thresholds") or {}
    if isinstance(radar, dict):
        for key, field in _RADAR_KEYS.items():
            if key in radar:
                overrides[field] = int(radar[key])

    patterns = config.get("sentiment_patterns") or {}
    if isinstance(patterns, dict) and patterns:
        current = dict(base.sentiment_patterns)
        for name, pattern in patterns.items():
            try:
                re.compile(str(pattern))
            except re.error as e:
                raise ValueError(f"sentiment_patterns.{name}: invalid regex {pattern!r}: {e}") from e
            current[str(name)] = str(pattern)
        overrides["sentiment_patterns"] = tuple(current.items())

    if config.get("core_threshold_factor") is not None:
        overrides["core_threshold_factor"] = float(config["core_threshold_factor"])

    if sample_files is None and config.get("sample_files") is not None:
        sample_files = int(config["sample_files"])
    if sample_files is not None:
        if sample_files <= 0:
            raise ValueError("sample_files must be a positive integer")
        overrides["sample_files"] = sample_files

    return dataclasses.replace(base, **overrides)


def exclude_dirnames_from_config(config: dict) -> set[str]:
    names = set(config.get("exclude_dirnames") or [])
    return names or set(DEFAULT_EXCLUDE_DIRNAMES)
