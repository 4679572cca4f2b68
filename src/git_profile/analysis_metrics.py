from __future__ import annotations

from .models import CollaborationResult, HeuristicsConfig, Metrics, Radar, Stats

BADGES = (
    "night_owl",
    "collaboration_hub",
    "domain_owner",
    "pioneer",
    "generalist",
    "code_sculptor",
    "marathoner",
    "anchor",
)


def derive_metrics(stats: Stats, avg_commits_per_person: float) -> Metrics:
    commits = stats.total_commits
    feat_ratio = stats.style.get("feat", 0) / commits if commits > 0 else 0.0
    net_growth = max(0, stats.total_additions - stats.total_deletions)
    growth_ratio = net_growth / (stats.total_additions + 1)
    innovation_ratio = 100 * (0.7 * feat_ratio + 0.3 * growth_ratio)

    if stats.refactor_removed > 0:
        refinement_impact = 50 * stats.refactor_removed / (stats.refactor_added + 1)
    else:
        refinement_impact = 0.0

    code_health_index = 100 * max(0.0, 1 - stats.fix_count / max(commits, 1))
    tech_breadth = min(100, 10 * len(stats.root_modules) + 5 * len(stats.file_extensions))

    if avg_commits_per_person > 0:
        beat_percent = min(99, round(50 * commits / avg_commits_per_person))
    else:
        beat_percent = 0

    stability_score = max(0, 100 - 10 * stats.sentiment.get("stressful", 0))

    return Metrics(
        innovation_ratio=innovation_ratio,
        refinement_impact=refinement_impact,
        code_health_index=code_health_index,
        tech_breadth=float(tech_breadth),
        beat_percent=int(beat_percent),
        stability_score=float(stability_score),
    )


def derive_radar(
    stats: Stats,
    metrics: Metrics,
    collaboration: CollaborationResult,
    config: HeuristicsConfig,
) -> Radar:
    activity = min(100.0, 100 * stats.total_commits / config.radar_active_commits)
    impact = min(100.0, 100 * stats.total_additions / config.radar_active_lines)
    refinement = min(100.0, 2 * metrics.refinement_impact)
    stability = (metrics.code_health_index + metrics.stability_score) / 2
    return Radar(
        activity=round(activity),
        impact=round(impact),
        refinement=round(refinement),
        collaboration=round(collaboration.interweaving_score),
        stability=round(stability),
        breadth=round(metrics.tech_breadth),
    )


def generate_badges(
    stats: Stats,
    metrics: Metrics,
    collaboration: CollaborationResult,
    config: HeuristicsConfig,
) -> list[str]:
    checks = (
        stats.midnight_commits > stats.total_commits * config.label_midnight_fraction,
        collaboration.interweaving_score > config.label_interweaving,
        collaboration.sole_maintenance_index > config.label_sole_maintenance,
        metrics.innovation_ratio > config.label_innovation,
        metrics.tech_breadth > config.label_tech_breadth,
        metrics.refinement_impact > config.label_refinement,
        stats.longest_day.value > config.label_longest_day_span,
        metrics.code_health_index > config.label_code_health,
    )
    return [name for name, hit in zip(BADGES, checks) if hit]
