from __future__ import annotations

import datetime as dt
import re
from collections import Counter
from collections.abc import Iterable

from .analysis_paths import extension_for_path, root_module_for_path
from .models import BiggestCommit, CommitChanges, DayExtreme, HeuristicsConfig, Stats


def classify_style(message: str, config: HeuristicsConfig) -> str:
    lower = message.lower()
    for key in config.style_priority:
        if key in lower:
            return key
    return "chore"


def sentiment_hits(message: str, config: HeuristicsConfig) -> list[str]:
    return [name for name, pattern in config.sentiment_patterns if re.search(pattern, message, re.IGNORECASE)]


def _is_later_moment(ts: dt.datetime, current: dt.datetime) -> bool:
    return (ts.hour, ts.minute) > (current.hour, current.minute)


def add_commit(stats: Stats, change: CommitChanges, config: HeuristicsConfig) -> None:
    commit = change.commit
    ts = commit.timestamp
    msg = commit.message

    stats.total_commits += 1
    stats.hours[ts.hour] += 1
    stats.weekdays[ts.weekday()] += 1
    stats.months[ts.month - 1] += 1
    stats.dates.setdefault(ts.date().isoformat(), []).append(ts)

    for name in sentiment_hits(msg, config):
        stats.sentiment[name] = stats.sentiment.get(name, 0) + 1

    if config.is_midnight(ts.hour):
        stats.midnight_commits += 1
        if stats.latest_moment is None or _is_later_moment(ts, stats.latest_moment.timestamp):
            stats.latest_moment = commit

    stats.messages.append(msg)

    style = classify_style(msg, config)
    stats.style[style] = stats.style.get(style, 0) + 1
    if style == "fix":
        stats.fix_count += 1
    is_refactor = style == "refactor"

    commit_changed = 0
    for fc in change.files:
        stats.total_additions += fc.added
        stats.total_deletions += fc.removed
        commit_changed += fc.changed
        if is_refactor:
            stats.refactor_added += fc.added
            stats.refactor_removed += fc.removed

        ext = extension_for_path(fc.path)
        if ext is not None:
            stats.file_extensions[ext] = stats.file_extensions.get(ext, 0) + 1
        stats.modules[fc.path] = stats.modules.get(fc.path, 0) + 1
        root = root_module_for_path(fc.path)
        stats.root_modules[root] = stats.root_modules.get(root, 0) + 1

    if commit_changed > stats.biggest_commit.lines:
        stats.biggest_commit = BiggestCommit(message=msg, lines=commit_changed, timestamp=ts)


def accumulate(changes: Iterable[CommitChanges], config: HeuristicsConfig) -> Stats:
    stats = Stats()
    for change in changes:
        add_commit(stats, change, config)
    return stats


def finalize_extremes(stats: Stats) -> Stats:
    """Second pass over the complete date map: busiest day and longest day span.

    Must run after every commit has been folded in; re-running after a merge
    recomputes both extremes from scratch.
    """
    max_per_day = DayExtreme()
    longest = DayExtreme()
    for date_key in sorted(stats.dates):
        times = stats.dates[date_key]
        if len(times) > max_per_day.value:
            max_per_day = DayExtreme(date=date_key, value=len(times))
        if len(times) > 1:
            span = round((max(times) - min(times)).total_seconds() / 3600, 1)
            if span > longest.value:
                longest = DayExtreme(date=date_key, value=span)
    stats.max_commits_per_day = max_per_day
    stats.longest_day = longest
    return stats


def extract_top_keywords(messages: list[str], config: HeuristicsConfig, top_n: int = 10) -> list[tuple[str, int]]:
    words = re.findall(r"\b\w+\b", " ".join(messages).lower())
    freq = Counter(w for w in words if len(w) > 2 and w not in config.stop_words)
    return freq.most_common(top_n)


def calculate_streak(date_keys: Iterable[str]) -> int:
    best = 0
    current = 0
    prev: dt.date | None = None
    for key in sorted(date_keys):
        day = dt.date.fromisoformat(key)
        if prev is not None and (day - prev).days == 1:
            current += 1
        else:
            current = 1
        best = max(best, current)
        prev = day
    return best
