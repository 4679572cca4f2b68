from __future__ import annotations

import dataclasses
import datetime as dt

STYLE_KEYS = ("feat", "fix", "refactor", "docs", "chore")
SENTIMENT_KEYS = ("positive", "negative", "stressful")


@dataclasses.dataclass(frozen=True)
class CommitRecord:
    hash: str
    timestamp: dt.datetime
    message: str


@dataclasses.dataclass(frozen=True)
class FileChange:
    path: str
    added: int = 0
    removed: int = 0

    @property
    def changed(self) -> int:
        return self.added + self.removed


@dataclasses.dataclass(frozen=True)
class CommitChanges:
    commit: CommitRecord
    files: tuple[FileChange, ...] = ()


@dataclasses.dataclass(frozen=True)
class BiggestCommit:
    message: str = ""
    lines: int = 0
    timestamp: dt.datetime | None = None


@dataclasses.dataclass(frozen=True)
class DayExtreme:
    date: str = ""
    value: float = 0


@dataclasses.dataclass
class Stats:
    total_commits: int = 0
    total_additions: int = 0
    total_deletions: int = 0
    hours: list[int] = dataclasses.field(default_factory=lambda: [0] * 24)
    weekdays: list[int] = dataclasses.field(default_factory=lambda: [0] * 7)  # Monday == 0
    months: list[int] = dataclasses.field(default_factory=lambda: [0] * 12)
    dates: dict[str, list[dt.datetime]] = dataclasses.field(default_factory=dict)
    modules: dict[str, int] = dataclasses.field(default_factory=dict)  # path -> touches
    root_modules: dict[str, int] = dataclasses.field(default_factory=dict)
    file_extensions: dict[str, int] = dataclasses.field(default_factory=dict)
    style: dict[str, int] = dataclasses.field(default_factory=lambda: {k: 0 for k in STYLE_KEYS})
    refactor_added: int = 0
    refactor_removed: int = 0
    fix_count: int = 0
    sentiment: dict[str, int] = dataclasses.field(default_factory=lambda: {k: 0 for k in SENTIMENT_KEYS})
    biggest_commit: BiggestCommit = dataclasses.field(default_factory=BiggestCommit)
    midnight_commits: int = 0
    latest_moment: CommitRecord | None = None
    longest_day: DayExtreme = dataclasses.field(default_factory=DayExtreme)
    max_commits_per_day: DayExtreme = dataclasses.field(default_factory=DayExtreme)
    messages: list[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(frozen=True)
class ProjectStats:
    total_commits: int = 1
    total_authors: int = 1
    avg_commits_per_person: float = 1.0

    @classmethod
    def from_counts(cls, total_commits: int, total_authors: int) -> ProjectStats:
        commits = max(1, int(total_commits))
        authors = max(1, int(total_authors))
        return cls(total_commits=commits, total_authors=authors, avg_commits_per_person=commits / authors)


@dataclasses.dataclass(frozen=True)
class CollaborationResult:
    interweaving_score: float = 0.0
    sole_maintenance_index: float = 0.0
    files_sampled: int = 0
    blame_lines: int = 0
    other_lines: int = 0
    sole_files: int = 0


@dataclasses.dataclass(frozen=True)
class Metrics:
    innovation_ratio: float = 0.0
    refinement_impact: float = 0.0
    code_health_index: float = 0.0
    tech_breadth: float = 0.0
    beat_percent: int = 0
    stability_score: float = 0.0


@dataclasses.dataclass(frozen=True)
class Radar:
    activity: int = 0
    impact: int = 0
    refinement: int = 0
    collaboration: int = 0
    stability: int = 0
    breadth: int = 0

    def as_dict(self) -> dict[str, int]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class ProjectContribution:
    name: str
    contribution_ratio: float
    authors: int
    commits: int
    core_threshold: float
    is_core: bool


@dataclasses.dataclass(frozen=True)
class RoleEvaluation:
    role: str
    narrative: str
    evidence: tuple[str, ...]
    contribution_ratio: float
    sole_maintenance_index: float
    innovation_ratio: float
    total_commits: int
    total_projects: int
    core_project_count: int
    core_project_ratio: float


@dataclasses.dataclass
class RepoResult:
    name: str
    path: str
    author: str
    period_label: str
    stats: Stats
    project_stats: ProjectStats
    collaboration: CollaborationResult
    metrics: Metrics
    commits: list[CommitRecord]  # ascending by timestamp

    @property
    def contribution_ratio(self) -> float:
        if self.project_stats.total_commits <= 0:
            return 0.0
        return self.stats.total_commits / self.project_stats.total_commits * 100


@dataclasses.dataclass
class BatchResult:
    results: list[RepoResult]
    failures: list[tuple[str, str]]  # (path, error)


@dataclasses.dataclass(frozen=True)
class HeuristicsConfig:
    sentiment_patterns: tuple[tuple[str, str], ...] = (
        ("positive", r"feat|improve|optimize|perfect|clean|refactor|add|success|resolve"),
        ("negative", r"bug|fix|error|issue|fail|broken|revert|temp|shit|problem"),
        ("stressful", r"urgent|critical|hotfix|immediately|!!!|deadline|priority"),
    )
    # First match wins; anything else is "chore".
    style_priority: tuple[str, ...] = ("feat", "fix", "refactor", "docs")
    stop_words: frozenset[str] = frozenset(
        {"the", "and", "to", "for", "in", "of", "with", "add", "fix", "update", "feat", "merged", "branch"}
    )
    midnight_hours: tuple[int, int] = (0, 6)  # inclusive
    sample_files: int = 10
    label_midnight_fraction: float = 0.15
    label_interweaving: float = 40
    label_sole_maintenance: float = 60
    label_innovation: float = 40
    label_tech_breadth: float = 70
    label_refinement: float = 40
    label_longest_day_span: float = 8
    label_code_health: float = 85
    radar_active_commits: int = 250
    radar_active_lines: int = 12_000
    core_threshold_factor: float = 1.8

    def is_midnight(self, hour: int) -> bool:
        lo, hi = self.midnight_hours
        return lo <= hour <= hi
