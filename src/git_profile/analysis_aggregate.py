from __future__ import annotations

from .analysis_collab import collaboration_from_counts
from .analysis_stats import finalize_extremes
from .errors import InputUnavailable
from .models import CollaborationResult, ProjectStats, Stats


def add_histogram(dst: list[int], src: list[int]) -> None:
    for i, v in enumerate(src):
        dst[i] += int(v)


def merge_counts(dst: dict[str, int], src: dict[str, int]) -> None:
    for key, v in src.items():
        dst[key] = int(dst.get(key, 0)) + int(v)


def merge_dates(dst: dict[str, list], src: dict[str, list]) -> None:
    for date_key, times in src.items():
        dst.setdefault(date_key, []).extend(times)


def add_stats(dst: Stats, src: Stats) -> None:
    dst.total_commits += src.total_commits
    dst.total_additions += src.total_additions
    dst.total_deletions += src.total_deletions
    add_histogram(dst.hours, src.hours)
    add_histogram(dst.weekdays, src.weekdays)
    add_histogram(dst.months, src.months)
    merge_dates(dst.dates, src.dates)
    merge_counts(dst.modules, src.modules)
    merge_counts(dst.root_modules, src.root_modules)
    merge_counts(dst.file_extensions, src.file_extensions)
    merge_counts(dst.style, src.style)
    merge_counts(dst.sentiment, src.sentiment)
    dst.refactor_added += src.refactor_added
    dst.refactor_removed += src.refactor_removed
    dst.fix_count += src.fix_count
    dst.midnight_commits += src.midnight_commits
    dst.messages.extend(src.messages)

    if src.biggest_commit.lines > dst.biggest_commit.lines:
        dst.biggest_commit = src.biggest_commit
    if src.latest_moment is not None:
        cur = dst.latest_moment
        if cur is None or (src.latest_moment.timestamp.hour, src.latest_moment.timestamp.minute) > (
            cur.timestamp.hour,
            cur.timestamp.minute,
        ):
            dst.latest_moment = src.latest_moment


def merge_stats(items: list[Stats]) -> Stats:
    """Merge per-repository stats in list order into a new, re-finalized Stats.

    Extremes keep the earlier entry on ties, so the input order must be fixed.
    Inputs are not mutated.
    """
    merged = Stats()
    for s in items:
        add_stats(merged, s)
    return finalize_extremes(merged)


def merge_project_stats(items: list[ProjectStats]) -> ProjectStats:
    if not items:
        return ProjectStats()
    # Unweighted mean of the per-repository averages.
    avg = sum(p.avg_commits_per_person for p in items) / len(items)
    return ProjectStats(
        total_commits=sum(p.total_commits for p in items),
        total_authors=sum(p.total_authors for p in items),
        avg_commits_per_person=avg,
    )


def merge_collaboration(items: list[CollaborationResult]) -> CollaborationResult:
    # Re-derived from the raw per-repository sample counts, not averaged.
    return collaboration_from_counts(
        files_sampled=sum(c.files_sampled for c in items),
        blame_lines=sum(c.blame_lines for c in items),
        other_lines=sum(c.other_lines for c in items),
        sole_files=sum(c.sole_files for c in items),
    )


def aggregate(pairs: list[tuple[Stats, ProjectStats]]) -> tuple[Stats, ProjectStats]:
    if not pairs:
        raise InputUnavailable("No repository produced any data to aggregate.")
    return merge_stats([s for s, _p in pairs]), merge_project_stats([p for _s, p in pairs])
