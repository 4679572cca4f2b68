from __future__ import annotations

import datetime as dt

from .models import CommitChanges, CommitRecord, FileChange

LOG_FORMAT = "%h|%ad|%s"
COMMIT_SEP = "COMMIT_SEP|"


def parse_commit_timestamp(value: str) -> dt.datetime | None:
    s = (value or "").strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        ts = dt.datetime.fromisoformat(s)
    except ValueError:
        # `--date=iso` renders "2024-01-02 10:00:00 +0800"
        try:
            ts = dt.datetime.strptime(s, "%Y-%m-%d %H:%M:%S %z")
        except ValueError:
            return None
    if ts.tzinfo is None:
        # No offset: keep the wall clock and pin it to UTC so timestamps stay comparable.
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts


def parse_log_lines(raw_log: str) -> list[CommitRecord]:
    """Parse `hash|timestamp|subject` lines, keeping git's output order.

    The line is split on every `|`, so a subject that itself contains `|` is
    truncated at its first pipe.
    """
    records: list[CommitRecord] = []
    for line in (raw_log or "").splitlines():
        if not line.strip():
            continue
        parts = line.split("|")
        commit_hash = parts[0].strip()
        ts = parse_commit_timestamp(parts[1]) if len(parts) > 1 else None
        if not commit_hash or ts is None:
            continue
        message = parts[2] if len(parts) > 2 else ""
        records.append(CommitRecord(hash=commit_hash, timestamp=ts, message=message))
    return records


def _count(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_diff_stat_blocks(raw_diff_stat: str) -> dict[str, list[FileChange]]:
    blocks: dict[str, list[FileChange]] = {}
    for block in (raw_diff_stat or "").split(COMMIT_SEP):
        lines = block.strip().splitlines()
        if not lines:
            continue
        commit_hash = lines[0].strip()
        if not commit_hash:
            continue
        files = blocks.setdefault(commit_hash, [])
        for line in lines[1:]:
            parts = line.split("\t")
            if len(parts) != 3:
                continue
            files.append(FileChange(path=parts[2], added=_count(parts[0]), removed=_count(parts[1])))
    return blocks


def correlate(raw_log: str, raw_diff_stat: str) -> tuple[list[CommitRecord], list[CommitChanges]]:
    """Join diff-stat blocks to log entries by exact hash.

    Returns the log entries sorted ascending by timestamp and the correlated
    pairs in the original log order. Blocks whose hash has no log entry are
    dropped; a log entry without a block is paired with no file changes.
    """
    records = parse_log_lines(raw_log)
    blocks = parse_diff_stat_blocks(raw_diff_stat)

    pairs: list[CommitChanges] = []
    seen: set[str] = set()
    for rec in records:
        if rec.hash in seen:
            continue
        seen.add(rec.hash)
        pairs.append(CommitChanges(commit=rec, files=tuple(blocks.get(rec.hash, ()))))

    ordered = sorted((p.commit for p in pairs), key=lambda r: r.timestamp)
    return ordered, pairs
