from __future__ import annotations

import pytest

from git_profile.analysis_metrics import BADGES, derive_metrics, derive_radar, generate_badges
from git_profile.models import CollaborationResult, DayExtreme, HeuristicsConfig, Metrics, Stats


def _stats(**kwargs: object) -> Stats:
    stats = Stats()
    for key, value in kwargs.items():
        setattr(stats, key, value)
    return stats


def test_beat_percent_example() -> None:
    metrics = derive_metrics(_stats(total_commits=20), 10)
    assert metrics.beat_percent == 99


def test_beat_percent_below_cap() -> None:
    assert derive_metrics(_stats(total_commits=3), 10).beat_percent == 15
    assert derive_metrics(_stats(total_commits=3), 0).beat_percent == 0


def test_formulas() -> None:
    stats = _stats(
        total_commits=4,
        total_additions=99,
        total_deletions=49,
        style={"feat": 2, "fix": 1, "refactor": 1, "docs": 0, "chore": 0},
        fix_count=1,
        refactor_added=9,
        refactor_removed=20,
        root_modules={"src": 3, "tests": 1},
        file_extensions={"py": 3, "md": 1, "toml": 1},
        sentiment={"positive": 2, "negative": 1, "stressful": 3},
    )
    m = derive_metrics(stats, 4)
    assert m.innovation_ratio == pytest.approx(100 * (0.7 * 0.5 + 0.3 * 50 / 100))
    assert m.refinement_impact == pytest.approx(100)
    assert m.code_health_index == pytest.approx(75)
    assert m.tech_breadth == 35
    assert m.stability_score == 70
    assert m.beat_percent == 50


def test_division_guards_on_empty_stats() -> None:
    m = derive_metrics(Stats(), 0)
    assert m == Metrics(
        innovation_ratio=0.0,
        refinement_impact=0.0,
        code_health_index=100.0,
        tech_breadth=0.0,
        beat_percent=0,
        stability_score=100.0,
    )


@pytest.mark.parametrize(
    "stats",
    [
        _stats(total_commits=1, total_additions=10**6, style={"feat": 1}, fix_count=1),
        _stats(
            total_commits=5000,
            total_additions=10**7,
            total_deletions=10,
            root_modules={str(i): 1 for i in range(30)},
            file_extensions={str(i): 1 for i in range(30)},
            refactor_removed=10**6,
            sentiment={"stressful": 40},
        ),
        _stats(total_commits=2, total_deletions=500, fix_count=2),
    ],
)
def test_metrics_and_radar_stay_in_range(stats: Stats) -> None:
    m = derive_metrics(stats, 3)
    for value in (m.innovation_ratio, m.code_health_index, m.tech_breadth, m.stability_score):
        assert 0 <= value <= 100
    assert 0 <= m.beat_percent <= 99
    radar = derive_radar(stats, m, CollaborationResult(interweaving_score=100.0), HeuristicsConfig())
    assert all(0 <= v <= 100 for v in radar.as_dict().values())


def test_radar_values() -> None:
    stats = _stats(total_commits=125, total_additions=3000)
    m = Metrics(refinement_impact=30, code_health_index=90, stability_score=70, tech_breadth=45)
    radar = derive_radar(stats, m, CollaborationResult(interweaving_score=33.4), HeuristicsConfig())
    assert radar.as_dict() == {
        "activity": 50,
        "impact": 25,
        "refinement": 60,
        "collaboration": 33,
        "stability": 80,
        "breadth": 45,
    }


def test_badges_are_independent() -> None:
    config = HeuristicsConfig()
    stats = _stats(total_commits=10, midnight_commits=2, longest_day=DayExtreme("2024-01-01", 9.5))
    metrics = Metrics(innovation_ratio=10, tech_breadth=80, refinement_impact=0, code_health_index=50)
    collab = CollaborationResult(interweaving_score=41, sole_maintenance_index=0)
    badges = generate_badges(stats, metrics, collab, config)
    assert badges == ["night_owl", "collaboration_hub", "generalist", "marathoner"]

    everything = generate_badges(
        stats,
        Metrics(innovation_ratio=50, tech_breadth=80, refinement_impact=50, code_health_index=90),
        CollaborationResult(interweaving_score=50, sole_maintenance_index=70),
        config,
    )
    assert everything == list(BADGES)
    assert generate_badges(Stats(), Metrics(), CollaborationResult(), config) == []
