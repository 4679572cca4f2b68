from __future__ import annotations

import pytest

from git_profile.analysis_collab import analyze_collaboration, collaboration_from_counts, sample_file, top_files
from git_profile.identity import MeMatcher
from git_profile.models import Stats

ME = MeMatcher.from_values(["me@example.com"], ["Me"])
MINE = ("Me", "<me@example.com>")
THEIRS = ("Other", "<other@example.com>")


class FakeAccessor:
    def __init__(
        self,
        blame: dict[str, list[tuple[str, str]]],
        authors: dict[str, int],
        broken: set[str] | None = None,
        broken_log: set[str] | None = None,
    ) -> None:
        self.blame = blame
        self.authors = authors
        self.broken = broken or set()
        self.broken_log = broken_log or set()
        self.blamed: list[str] = []

    def blame_authors(self, path: str) -> list[tuple[str, str]]:
        self.blamed.append(path)
        if path in self.broken:
            raise OSError(f"cannot read {path}")
        return self.blame.get(path, [])

    def distinct_author_count(self, path: str) -> int:
        if path in self.broken_log:
            raise OSError(f"cannot log {path}")
        return self.authors.get(path, 0)


def _stats(modules: dict[str, int]) -> Stats:
    stats = Stats()
    stats.modules = dict(modules)
    return stats


def test_interweaving_excludes_zero_data_files() -> None:
    accessor = FakeAccessor(
        blame={"a.py": [MINE] * 6 + [THEIRS] * 2, "gone.py": []},
        authors={"a.py": 2, "gone.py": 0},
    )
    result = analyze_collaboration(_stats({"a.py": 3, "gone.py": 1}), accessor, ME)
    assert result.files_sampled == 2
    assert result.blame_lines == 8
    assert result.other_lines == 2
    assert result.interweaving_score == 25
    assert result.sole_maintenance_index == 0


def test_sole_maintenance_index() -> None:
    accessor = FakeAccessor(
        blame={"a.py": [MINE], "b.py": [MINE], "c.py": [THEIRS], "d.py": [MINE]},
        authors={"a.py": 1, "b.py": 1, "c.py": 3, "d.py": 2},
    )
    result = analyze_collaboration(_stats({"a.py": 4, "b.py": 3, "c.py": 2, "d.py": 1}), accessor, ME)
    assert result.sole_maintenance_index == 50
    assert result.interweaving_score == 25


def test_empty_sample_scores_zero() -> None:
    result = analyze_collaboration(Stats(), FakeAccessor({}, {}), ME)
    assert result.files_sampled == 0
    assert result.interweaving_score == 0
    assert result.sole_maintenance_index == 0


def test_failed_blame_counts_as_zero_lines() -> None:
    accessor = FakeAccessor(blame={"ok.py": [THEIRS, MINE]}, authors={"ok.py": 2, "bad.py": 1}, broken={"bad.py"})
    sample = sample_file(accessor, "bad.py", ME)
    assert (sample.blame_lines, sample.other_lines, sample.author_count) == (0, 0, 1)

    result = analyze_collaboration(_stats({"bad.py": 5, "ok.py": 1}), accessor, ME)
    assert result.files_sampled == 2
    assert result.interweaving_score == 50
    assert result.sole_maintenance_index == 50


def test_failed_author_count_keeps_blame_lines() -> None:
    accessor = FakeAccessor(blame={"a.py": [MINE, MINE, MINE, THEIRS]}, authors={"a.py": 1}, broken_log={"a.py"})
    sample = sample_file(accessor, "a.py", ME)
    assert (sample.blame_lines, sample.other_lines, sample.author_count) == (4, 1, 0)

    result = analyze_collaboration(_stats({"a.py": 2}), accessor, ME)
    assert result.interweaving_score == 25
    assert result.sole_maintenance_index == 0


def test_sample_size_limits_blamed_files() -> None:
    accessor = FakeAccessor(blame={}, authors={})
    stats = _stats({f"f{i}.py": 100 - i for i in range(15)})
    result = analyze_collaboration(stats, accessor, ME, sample_files=10, jobs=3)
    assert result.files_sampled == 10
    assert sorted(accessor.blamed) == sorted(f"f{i}.py" for i in range(10))


def test_top_files_stable_on_ties() -> None:
    stats = _stats({"b.py": 2, "a.py": 5, "c.py": 2, "d.py": 1})
    assert top_files(stats, 3) == ["a.py", "b.py", "c.py"]
    assert top_files(stats, 0) == []


@pytest.mark.parametrize(
    "counts",
    [
        dict(files_sampled=0, blame_lines=0, other_lines=0, sole_files=0),
        dict(files_sampled=3, blame_lines=10, other_lines=10, sole_files=3),
        dict(files_sampled=7, blame_lines=91, other_lines=4, sole_files=2),
    ],
)
def test_scores_stay_in_range(counts: dict[str, int]) -> None:
    result = collaboration_from_counts(**counts)
    assert 0 <= result.interweaving_score <= 100
    assert 0 <= result.sole_maintenance_index <= 100
