from __future__ import annotations

import json
from pathlib import Path

import pytest

from git_profile.config import DEFAULT_EXCLUDE_DIRNAMES, exclude_dirnames_from_config, heuristics_from_config, load_config
from git_profile.models import HeuristicsConfig


def test_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_config(tmp_path / "config.json") == {}
    assert load_config(None) == {}


def test_config_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_defaults() -> None:
    assert heuristics_from_config({}) == HeuristicsConfig()
    assert exclude_dirnames_from_config({}) == set(DEFAULT_EXCLUDE_DIRNAMES)


def test_overrides(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "sample_files": 5,
                "label_thresholds": {"interweaving_score": 30, "midnight_commits": 0.2},
                "radar_thresholds": {"active_commits": 100},
                "sentiment_patterns": {"stressful": "asap"},
                "core_threshold_factor": 1.5,
                "exclude_dirnames": ["third_party"],
            }
        ),
        encoding="utf-8",
    )
    config = load_config(path)
    h = heuristics_from_config(config)
    assert h.sample_files == 5
    assert h.label_interweaving == 30
    assert h.label_midnight_fraction == 0.2
    assert h.label_sole_maintenance == HeuristicsConfig().label_sole_maintenance
    assert h.radar_active_commits == 100
    assert h.radar_active_lines == 12_000
    assert dict(h.sentiment_patterns)["stressful"] == "asap"
    assert "positive" in dict(h.sentiment_patterns)
    assert h.core_threshold_factor == 1.5
    assert exclude_dirnames_from_config(config) == {"third_party"}


def test_cli_sample_overrides_config() -> None:
    assert heuristics_from_config({"sample_files": 5}, sample_files=3).sample_files == 3
    with pytest.raises(ValueError):
        heuristics_from_config({"sample_files": 0})


def test_invalid_sentiment_regex_is_rejected() -> None:
    with pytest.raises(ValueError, match="stressful"):
        heuristics_from_config({"sentiment_patterns": {"stressful": "urgent|("}})
