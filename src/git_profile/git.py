from __future__ import annotations

import os
import re
import subprocess
from pathlib import Path

from .analysis_log import COMMIT_SEP, LOG_FORMAT
from .analysis_periods import Period
from .errors import RepositoryError
from .identity import MeMatcher
from .models import ProjectStats


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def discover_git_roots(root: Path, exclude_dirnames: set[str]) -> list[Path]:
    roots: list[Path] = []

    def onerror(err: OSError) -> None:
        _ = err

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        has_git = ".git" in dirnames or ".git" in filenames
        if has_git:
            roots.append(Path(dirpath))
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirnames)
    return sorted(roots)


def validate_repo(path: Path) -> Path:
    resolved = path.expanduser().resolve()
    if not resolved.exists():
        raise RepositoryError(f"Repository path does not exist: {resolved}", "Check the path, or run inside a repository.")
    code, out, _ = run_git(["rev-parse", "--git-dir"], cwd=resolved)
    if code != 0 or not out.strip():
        raise RepositoryError(
            f"Not a git repository: {resolved}",
            "Point at a directory that contains a .git directory.",
        )
    return resolved


def git_user(repo: Path) -> tuple[str, str]:
    values: list[str] = []
    for key in ("user.email", "user.name"):
        code, out, _ = run_git(["config", "--get", key], cwd=repo)
        values.append(out.strip() if code == 0 else "")
    return values[0], values[1]


_REMOTE_NAME = re.compile(r"[/:]([^/:]+?)(?:\.git)?/?$")


def project_name(repo: Path) -> str:
    code, out, _ = run_git(["config", "--get", "remote.origin.url"], cwd=repo)
    if code == 0 and out.strip():
        m = _REMOTE_NAME.search(out.strip())
        if m:
            return m.group(1)
    return repo.name


def parse_blame_porcelain(text: str) -> list[tuple[str, str]]:
    """One (author name, author email) entry per line of `git blame --line-porcelain`."""
    out: list[tuple[str, str]] = []
    name = ""
    for line in text.splitlines():
        if line.startswith("author-mail "):
            out.append((name, line[len("author-mail ") :].strip()))
        elif line.startswith("author "):
            name = line[len("author ") :].strip()
    return out


class GitAccessor:
    """One-shot git queries for one repository and one author."""

    def __init__(self, repo: Path, me: MeMatcher, timeout_s: int = 300) -> None:
        self.repo = repo
        self.me = me
        self.timeout_s = timeout_s

    def _author_args(self) -> list[str]:
        args = self.me.git_author_args()
        if args:
            args.append("--regexp-ignore-case")
        return args

    def _range_args(self, period: Period) -> list[str]:
        return [f"--since={period.since}", f"--until={period.until}", "--all"]

    def _log(self, extra: list[str], period: Period) -> str:
        args = ["log", *self._author_args(), *self._range_args(period), *extra]
        code, out, err = run_git(args, cwd=self.repo, timeout_s=self.timeout_s)
        if code != 0:
            raise RepositoryError(f"git log exited {code}: {err.strip()[:500]}")
        return out

    def raw_log(self, period: Period) -> str:
        return self._log([f"--pretty=format:{LOG_FORMAT}", "--date=iso-strict"], period)

    def raw_diff_stat(self, period: Period) -> str:
        return self._log(["--numstat", f"--pretty=format:{COMMIT_SEP}%h"], period)

    def baseline_project_stats(self, period: Period) -> ProjectStats:
        code, out, _ = run_git(
            ["rev-list", "--count", *self._range_args(period)],
            cwd=self.repo,
            timeout_s=self.timeout_s,
        )
        try:
            total_commits = int(out.strip()) if code == 0 else 0
        except ValueError:
            total_commits = 0
        code, out, _ = run_git(
            ["log", *self._range_args(period), "--format=%ae"],
            cwd=self.repo,
            timeout_s=self.timeout_s,
        )
        authors = {line.strip() for line in out.splitlines() if line.strip()} if code == 0 else set()
        return ProjectStats.from_counts(total_commits, len(authors))

    def blame_authors(self, path: str) -> list[tuple[str, str]]:
        code, out, _ = run_git(["blame", "--line-porcelain", "--", path], cwd=self.repo, timeout_s=self.timeout_s)
        if code != 0:
            return []
        return parse_blame_porcelain(out)

    def distinct_author_count(self, path: str) -> int:
        code, out, _ = run_git(["log", "--format=%ae", "--", path], cwd=self.repo, timeout_s=self.timeout_s)
        if code != 0:
            return 0
        return len({line.strip() for line in out.splitlines() if line.strip()})
