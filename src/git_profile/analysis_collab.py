from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

from .analysis_paths import repo_relative_path
from .identity import MeMatcher
from .models import CollaborationResult, Stats


class AuthorshipAccessor(Protocol):
    def blame_authors(self, path: str) -> list[tuple[str, str]]: ...

    def distinct_author_count(self, path: str) -> int: ...


@dataclasses.dataclass(frozen=True)
class FileSample:
    path: str
    blame_lines: int = 0
    other_lines: int = 0
    author_count: int = 0


def top_files(stats: Stats, k: int) -> list[str]:
    if k <= 0:
        return []
    # sorted() is stable: equal touch counts keep first-touched order.
    ranked = sorted(stats.modules.items(), key=lambda kv: -kv[1])
    return [path for path, _count in ranked[:k]]


def sample_file(accessor: AuthorshipAccessor, path: str, me: MeMatcher) -> FileSample:
    rel = repo_relative_path(path)
    # Each query degrades to zero data on its own.
    try:
        authors = accessor.blame_authors(rel)
    except Exception:
        authors = []
    try:
        author_count = int(accessor.distinct_author_count(rel) or 0)
    except Exception:
        author_count = 0
    others = sum(1 for name, email in authors if not me.matches(name, email))
    return FileSample(path=path, blame_lines=len(authors), other_lines=others, author_count=author_count)


def collaboration_from_counts(*, files_sampled: int, blame_lines: int, other_lines: int, sole_files: int) -> CollaborationResult:
    interweaving = other_lines / blame_lines * 100 if blame_lines > 0 else 0.0
    sole_index = sole_files / files_sampled * 100 if files_sampled > 0 else 0.0
    return CollaborationResult(
        interweaving_score=interweaving,
        sole_maintenance_index=sole_index,
        files_sampled=files_sampled,
        blame_lines=blame_lines,
        other_lines=other_lines,
        sole_files=sole_files,
    )


def summarize_samples(samples: list[FileSample]) -> CollaborationResult:
    return collaboration_from_counts(
        files_sampled=len(samples),
        blame_lines=sum(s.blame_lines for s in samples),
        other_lines=sum(s.other_lines for s in samples),
        sole_files=sum(1 for s in samples if s.author_count == 1),
    )


def analyze_collaboration(
    stats: Stats,
    accessor: AuthorshipAccessor,
    me: MeMatcher,
    *,
    sample_files: int = 10,
    jobs: int = 4,
) -> CollaborationResult:
    """Blame the most-touched files and score how shared their code is.

    Per-file queries run concurrently; results come back in sample order via
    `map`, so the totals do not depend on completion order.
    """
    paths = top_files(stats, sample_files)
    if not paths:
        return CollaborationResult()
    with ThreadPoolExecutor(max_workers=max(1, min(jobs, len(paths)))) as ex:
        samples = list(ex.map(lambda p: sample_file(accessor, p, me), paths))
    return summarize_samples(samples)
