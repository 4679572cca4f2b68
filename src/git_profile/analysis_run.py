from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .analysis_aggregate import aggregate, merge_collaboration
from .analysis_metrics import derive_metrics
from .analysis_periods import Period
from .analysis_repo import analyze_repo
from .analysis_report import ReportModel, build_report
from .analysis_role import classify_role, contributions_for_results
from .errors import InputUnavailable, ProfileError
from .identity import MeMatcher
from .models import BatchResult, HeuristicsConfig, RepoResult


def report_for_repo(result: RepoResult, config: HeuristicsConfig) -> ReportModel:
    projects = contributions_for_results([result], config)
    role = classify_role(
        result.stats,
        result.metrics,
        result.collaboration,
        projects,
        projects[0].contribution_ratio,
    )
    return build_report(
        user=result.author,
        period_label=result.period_label,
        project_name=result.name,
        stats=result.stats,
        project_stats=result.project_stats,
        metrics=result.metrics,
        collaboration=result.collaboration,
        commits=result.commits,
        config=config,
        role=role,
        projects=projects,
    )


def report_for_batch(batch: BatchResult, config: HeuristicsConfig) -> ReportModel:
    """Merge per-repository results in their fixed input order and build one report."""
    results = batch.results
    if not results:
        raise InputUnavailable("Every repository failed to analyze.")
    if len(results) == 1:
        return report_for_repo(results[0], config)

    stats, project_stats = aggregate([(r.stats, r.project_stats) for r in results])
    collaboration = merge_collaboration([r.collaboration for r in results])
    metrics = derive_metrics(stats, project_stats.avg_commits_per_person)
    contribution_ratio = stats.total_commits / project_stats.total_commits * 100 if project_stats.total_commits > 0 else 0.0
    projects = contributions_for_results(results, config)
    role = classify_role(stats, metrics, collaboration, projects, contribution_ratio)
    commits = sorted((c for r in results for c in r.commits), key=lambda c: c.timestamp)

    return build_report(
        user=results[0].author,
        period_label=results[0].period_label,
        project_name=", ".join(r.name for r in results),
        stats=stats,
        project_stats=project_stats,
        metrics=metrics,
        collaboration=collaboration,
        commits=commits,
        config=config,
        role=role,
        projects=projects,
        project_commits=[(r.name, r.stats.total_commits) for r in results],
    )


def run_batch(
    repos: list[Path],
    *,
    period: Period,
    config: HeuristicsConfig,
    me: MeMatcher | None = None,
    jobs: int = 4,
    quiet: bool = False,
) -> BatchResult:
    """Analyze repositories concurrently; failures are reported and excluded.

    Results keep the order of `repos` regardless of completion order, since
    the merge that follows breaks ties by position.
    """
    if not repos:
        raise InputUnavailable("No git repositories to analyze.")

    slots: list[RepoResult | None] = [None] * len(repos)
    failures: list[tuple[str, str]] = []
    errors: list[Exception] = []
    with ThreadPoolExecutor(max_workers=max(1, jobs)) as ex:
        futs = {
            ex.submit(analyze_repo, repo, period=period, config=config, me=me, jobs=jobs): i
            for i, repo in enumerate(repos)
        }
        for done, fut in enumerate(as_completed(futs), start=1):
            i = futs[fut]
            try:
                slots[i] = fut.result()
            except Exception as e:
                failures.append((str(repos[i]), str(e)))
                errors.append(e)
                if len(repos) > 1:
                    print(f"Warning: skipping {repos[i]}: {e}", file=sys.stderr)
            if not quiet and (done % 10 == 0 or done == len(futs)):
                print(f"Analyzed {done}/{len(futs)} repos...")

    results = [r for r in slots if r is not None]
    failures.sort(key=lambda f: f[0])
    if not results:
        if len(errors) == 1 and isinstance(errors[0], ProfileError):
            raise errors[0]
        raise InputUnavailable(
            "Every repository failed to analyze.",
            "Check the warnings above; each repository needs commits by you in the selected period.",
        )
    return BatchResult(results=results, failures=failures)
