from __future__ import annotations

import copy
import dataclasses
import datetime as dt

import pytest

from git_profile.analysis_aggregate import aggregate, merge_collaboration, merge_project_stats, merge_stats
from git_profile.analysis_stats import accumulate, finalize_extremes
from git_profile.errors import InputUnavailable
from git_profile.models import CollaborationResult, CommitChanges, CommitRecord, FileChange, HeuristicsConfig, ProjectStats


def _change(hash_: str, when: str, message: str, *files: tuple[str, int, int]) -> CommitChanges:
    return CommitChanges(
        commit=CommitRecord(hash=hash_, timestamp=dt.datetime.fromisoformat(when), message=message),
        files=tuple(FileChange(path=p, added=a, removed=r) for p, a, r in files),
    )


REPO_A = [
    _change("a1", "2024-01-02T10:00:00", "feat: add x", ("src/a.js", 10, 0)),
    _change("a2", "2024-01-02T14:00:00", "fix: y urgent", ("src/a.js", 2, 3)),
    _change("a3", "2024-01-05T02:00:00", "refactor: z", ("src/b.js", 5, 20)),
]
REPO_B = [
    _change("b1", "2024-01-02T16:30:00", "docs: readme", ("README.md", 4, 1)),
    _change("b2", "2024-02-11T05:45:00", "feat: cli", ("cli/main.py", 30, 2), ("cli/util.py", 1, 1)),
]


def test_merge_matches_accumulating_concatenated_commits() -> None:
    config = HeuristicsConfig()
    a = finalize_extremes(accumulate(REPO_A, config))
    b = finalize_extremes(accumulate(REPO_B, config))

    merged = merge_stats([a, b])
    direct = finalize_extremes(accumulate(REPO_A + REPO_B, config))
    assert dataclasses.asdict(merged) == dataclasses.asdict(direct)
    assert merged.longest_day.date == "2024-01-02"
    assert merged.longest_day.value == 6.5
    assert merged.max_commits_per_day.value == 3


def test_merge_does_not_mutate_inputs() -> None:
    config = HeuristicsConfig()
    a = finalize_extremes(accumulate(REPO_A, config))
    b = finalize_extremes(accumulate(REPO_B, config))
    before_a = copy.deepcopy(a)
    before_b = copy.deepcopy(b)

    merge_stats([a, b])
    assert a == before_a
    assert b == before_b


def test_merge_ties_keep_earlier_input() -> None:
    config = HeuristicsConfig()
    a = accumulate([_change("a", "2024-01-01T03:00:00", "from a", ("x.py", 5, 0))], config)
    b = accumulate([_change("b", "2024-01-09T03:00:00", "from b", ("y.py", 0, 5))], config)

    merged = merge_stats([a, b])
    assert merged.biggest_commit.message == "from a"
    assert merged.latest_moment is not None and merged.latest_moment.hash == "a"
    swapped = merge_stats([b, a])
    assert swapped.biggest_commit.message == "from b"


def test_merge_project_stats_unweighted_mean() -> None:
    merged = merge_project_stats([ProjectStats.from_counts(100, 2), ProjectStats.from_counts(10, 10)])
    assert merged.total_commits == 110
    assert merged.total_authors == 12
    assert merged.avg_commits_per_person == pytest.approx((50 + 1) / 2)


def test_merge_collaboration_from_raw_counts() -> None:
    merged = merge_collaboration(
        [
            CollaborationResult(interweaving_score=25, sole_maintenance_index=50, files_sampled=2, blame_lines=8, other_lines=2, sole_files=1),
            CollaborationResult(interweaving_score=100, sole_maintenance_index=0, files_sampled=2, blame_lines=2, other_lines=2, sole_files=0),
        ]
    )
    assert merged.interweaving_score == pytest.approx(40)
    assert merged.sole_maintenance_index == pytest.approx(25)
    assert merged.files_sampled == 4


def test_aggregate_requires_input() -> None:
    with pytest.raises(InputUnavailable):
        aggregate([])
