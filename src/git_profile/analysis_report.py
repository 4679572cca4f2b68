from __future__ import annotations

import dataclasses
import datetime as dt

from .analysis_metrics import derive_radar, generate_badges
from .analysis_stats import calculate_streak, extract_top_keywords
from .errors import InputUnavailable
from .models import (
    BiggestCommit,
    CollaborationResult,
    CommitRecord,
    DayExtreme,
    HeuristicsConfig,
    Metrics,
    ProjectContribution,
    ProjectStats,
    Radar,
    RoleEvaluation,
    Stats,
)


@dataclasses.dataclass(frozen=True)
class Milestone:
    kind: str
    date: str
    detail: str


@dataclasses.dataclass(frozen=True)
class ProjectShare:
    name: str
    commits: int
    share: float  # percent of the author's commits across all projects


@dataclasses.dataclass(frozen=True)
class ReportModel:
    user: str
    period_label: str
    project_name: str
    commits: int
    days_worked: int
    max_streak: int
    lines_added: int
    lines_removed: int
    project_total_commits: int
    project_authors: int
    contribution_ratio: float
    mood: str
    sentiment: tuple[tuple[str, int], ...]
    style: tuple[tuple[str, int], ...]
    metrics: Metrics
    collaboration: CollaborationResult
    radar: Radar
    latest_moment: CommitRecord | None
    biggest_commit: BiggestCommit
    longest_day: DayExtreme
    max_commits_per_day: DayExtreme
    midnight_commits: int
    hours: tuple[int, ...]
    weekdays: tuple[int, ...]
    months: tuple[int, ...]
    top_extensions: tuple[tuple[str, int], ...]
    root_modules: tuple[str, ...]
    files_touched: int
    refactor_added: int
    refactor_removed: int
    fix_count: int
    milestones: tuple[Milestone, ...]
    keywords: tuple[tuple[str, int], ...]
    peak_hour: int
    weekend_warrior: bool
    badges: tuple[str, ...]
    role: RoleEvaluation | None = None
    projects: tuple[ProjectContribution, ...] = ()
    project_shares: tuple[ProjectShare, ...] = ()


def format_ts(ts: dt.datetime | None) -> str:
    if ts is None:
        return ""
    return ts.strftime("%Y-%m-%d %H:%M")


def sentiment_mood(stats: Stats) -> str:
    if stats.sentiment.get("stressful", 0) > 5:
        return "under_pressure"
    if stats.sentiment.get("positive", 0) > stats.sentiment.get("negative", 0):
        return "energized"
    return "calm"


def build_report(
    *,
    user: str,
    period_label: str,
    project_name: str,
    stats: Stats,
    project_stats: ProjectStats,
    metrics: Metrics,
    collaboration: CollaborationResult,
    commits: list[CommitRecord],
    config: HeuristicsConfig,
    role: RoleEvaluation | None = None,
    projects: list[ProjectContribution] | None = None,
    project_commits: list[tuple[str, int]] | None = None,
) -> ReportModel:
    if not commits or stats.total_commits <= 0:
        raise InputUnavailable()

    max_streak = calculate_streak(stats.dates)
    first, last = commits[0], commits[-1]
    milestones = (
        Milestone("first_commit", format_ts(first.timestamp), first.message),
        Milestone("last_commit", format_ts(last.timestamp), last.message),
        Milestone(
            "biggest_commit",
            format_ts(stats.biggest_commit.timestamp),
            f"{stats.biggest_commit.lines} lines changed in one commit",
        ),
        Milestone("longest_streak", f"{max_streak} days", "consecutive days with commits"),
    )
    top_extensions = sorted(stats.file_extensions.items(), key=lambda kv: -kv[1])[:5]

    shares: list[ProjectShare] = []
    for name, n in sorted(project_commits or [], key=lambda kv: -kv[1]):
        shares.append(ProjectShare(name=name, commits=n, share=n / stats.total_commits * 100))

    hours = tuple(stats.hours)
    return ReportModel(
        user=user,
        period_label=period_label,
        project_name=project_name,
        commits=stats.total_commits,
        days_worked=len(stats.dates),
        max_streak=max_streak,
        lines_added=stats.total_additions,
        lines_removed=stats.total_deletions,
        project_total_commits=project_stats.total_commits,
        project_authors=project_stats.total_authors,
        contribution_ratio=round(stats.total_commits / max(project_stats.total_commits, 1) * 100, 1),
        mood=sentiment_mood(stats),
        sentiment=tuple(stats.sentiment.items()),
        style=tuple(stats.style.items()),
        metrics=metrics,
        collaboration=collaboration,
        radar=derive_radar(stats, metrics, collaboration, config),
        latest_moment=stats.latest_moment,
        biggest_commit=stats.biggest_commit,
        longest_day=stats.longest_day,
        max_commits_per_day=stats.max_commits_per_day,
        midnight_commits=stats.midnight_commits,
        hours=hours,
        weekdays=tuple(stats.weekdays),
        months=tuple(stats.months),
        top_extensions=tuple(top_extensions),
        root_modules=tuple(sorted(stats.root_modules)),
        files_touched=len(stats.modules),
        refactor_added=stats.refactor_added,
        refactor_removed=stats.refactor_removed,
        fix_count=stats.fix_count,
        milestones=milestones,
        keywords=tuple(extract_top_keywords(stats.messages, config)),
        peak_hour=hours.index(max(hours)),
        weekend_warrior=(stats.weekdays[5] + stats.weekdays[6]) > stats.total_commits * 0.3,
        badges=tuple(generate_badges(stats, metrics, collaboration, config)),
        role=role,
        projects=tuple(projects or ()),
        project_shares=tuple(shares),
    )


def report_to_dict(report: ReportModel) -> dict[str, object]:
    m = report.metrics
    c = report.collaboration
    data: dict[str, object] = {
        "project_name": report.project_name,
        "user": report.user,
        "period": report.period_label,
        "overview": {
            "commits": report.commits,
            "days_worked": report.days_worked,
            "max_streak": report.max_streak,
            "lines_added": report.lines_added,
            "lines_removed": report.lines_removed,
            "health": round(m.code_health_index, 1),
        },
        "contrast": {
            "project_total_commits": report.project_total_commits,
            "project_authors": report.project_authors,
            "contribution_ratio": report.contribution_ratio,
            "beat_percent": m.beat_percent,
        },
        "sentiment_profile": {"mood": report.mood, **dict(report.sentiment)},
        "style": dict(report.style),
        "advanced_metrics": {
            "sole_maintenance_index": round(c.sole_maintenance_index, 1),
            "interweaving_score": round(c.interweaving_score, 1),
            "innovation_ratio": round(m.innovation_ratio, 1),
            "refinement_impact": round(m.refinement_impact, 1),
            "tech_breadth": round(m.tech_breadth, 1),
            "stability_score": round(m.stability_score, 1),
            "files_sampled": c.files_sampled,
        },
        "time_capsule": {
            "latest_commit": (
                {"date": format_ts(report.latest_moment.timestamp), "message": report.latest_moment.message}
                if report.latest_moment is not None
                else None
            ),
            "longest_day": {"date": report.longest_day.date, "span_hours": report.longest_day.value},
            "max_commits_per_day": {"date": report.max_commits_per_day.date, "count": int(report.max_commits_per_day.value)},
            "midnight_commits": report.midnight_commits,
            "hourly_distribution": list(report.hours),
            "weekday_distribution": list(report.weekdays),
            "monthly_distribution": list(report.months),
        },
        "tech_fingerprint": {
            "top_extensions": [[ext, n] for ext, n in report.top_extensions],
            "root_modules": list(report.root_modules),
            "files_touched": report.files_touched,
        },
        "specialized": {
            "refactor_added": report.refactor_added,
            "refactor_removed": report.refactor_removed,
            "fix_count": report.fix_count,
        },
        "biggest_commit": {
            "message": report.biggest_commit.message,
            "lines": report.biggest_commit.lines,
            "date": format_ts(report.biggest_commit.timestamp) or None,
        },
        "radar": report.radar.as_dict(),
        "milestones": [dataclasses.asdict(ms) for ms in report.milestones],
        "poster_keywords": {
            "main": report.keywords[0][0].upper() if report.keywords else "CODING",
            "secondary": [k for k, _n in report.keywords[1:4]],
        },
        "habits": {"peak_hour": report.peak_hour, "weekend_warrior": report.weekend_warrior},
        "badges": list(report.badges),
    }
    if report.role is not None:
        role = dataclasses.asdict(report.role)
        role["evidence"] = list(report.role.evidence)
        data["role"] = role
    if report.projects:
        data["projects"] = [dataclasses.asdict(p) for p in report.projects]
    if report.project_shares:
        data["project_shares"] = [dataclasses.asdict(s) for s in report.project_shares]
    return data
