from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .analysis_collab import AuthorshipAccessor, analyze_collaboration
from .analysis_log import correlate
from .analysis_metrics import derive_metrics
from .analysis_periods import Period
from .analysis_stats import accumulate, finalize_extremes
from .errors import InputUnavailable, RepositoryError
from .git import GitAccessor, git_user, project_name, validate_repo
from .identity import MeMatcher
from .models import HeuristicsConfig, ProjectStats, RepoResult


class RepoAccessor(AuthorshipAccessor, Protocol):
    def raw_log(self, period: Period) -> str: ...

    def raw_diff_stat(self, period: Period) -> str: ...

    def baseline_project_stats(self, period: Period) -> ProjectStats: ...


def resolve_me(repo: Path, me: MeMatcher | None) -> MeMatcher:
    if me is not None and not me.empty:
        return me
    email, name = git_user(repo)
    resolved = MeMatcher.from_values([email] if email else [], [name] if name else [])
    if resolved.empty:
        raise RepositoryError(
            f"Could not detect a git identity for {repo}",
            'Run `git config user.email "you@example.com"` or set me_emails in config.json.',
        )
    return resolved


def profile_repo(
    accessor: RepoAccessor,
    *,
    name: str,
    path: str,
    me: MeMatcher,
    period: Period,
    config: HeuristicsConfig,
    jobs: int = 4,
) -> RepoResult:
    """Run the single-repository pipeline against an accessor.

    Stages run strictly in order: baseline, log + diff-stat correlation, the
    stats fold, the extremes pass, then blame sampling and metrics.
    """
    project_stats = accessor.baseline_project_stats(period)
    raw_log = accessor.raw_log(period)
    if not raw_log.strip():
        raise InputUnavailable(f"No commits by {me.label or 'the author'} in {period.label} for {name}.")
    raw_diff_stat = accessor.raw_diff_stat(period)

    commits, changes = correlate(raw_log, raw_diff_stat)
    if not changes:
        raise InputUnavailable(f"No parseable commits by {me.label or 'the author'} in {period.label} for {name}.")

    stats = finalize_extremes(accumulate(changes, config))
    collaboration = analyze_collaboration(stats, accessor, me, sample_files=config.sample_files, jobs=jobs)
    metrics = derive_metrics(stats, project_stats.avg_commits_per_person)

    return RepoResult(
        name=name,
        path=path,
        author=me.label,
        period_label=period.label,
        stats=stats,
        project_stats=project_stats,
        collaboration=collaboration,
        metrics=metrics,
        commits=commits,
    )


def analyze_repo(
    repo_path: Path,
    *,
    period: Period,
    config: HeuristicsConfig,
    me: MeMatcher | None = None,
    jobs: int = 4,
) -> RepoResult:
    repo = validate_repo(repo_path)
    who = resolve_me(repo, me)
    return profile_repo(
        GitAccessor(repo, who),
        name=project_name(repo),
        path=str(repo),
        me=who,
        period=period,
        config=config,
        jobs=jobs,
    )
