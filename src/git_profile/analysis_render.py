from __future__ import annotations

from .analysis_report import ReportModel, format_ts

PROFILE_BANNER = r"""
+------------------------------------------------------------------------+
|                           DEVELOPER PROFILE                            |
+------------------------------------------------------------------------+
""".strip("\n")

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def fmt_int(n: int) -> str:
    return f"{int(n):,}"


def trunc(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 1:
        return s[:max_len]
    return s[: max_len - 1] + "…"


def bar(value: float, max_value: float, width: int = 22) -> str:
    if max_value <= 0:
        filled = 0
    else:
        filled = int(round((value / max_value) * width))
    filled = max(0, min(width, filled))
    return "[" + ("#" * filled) + ("-" * (width - filled)) + "]"


def render_report(report: ReportModel) -> str:
    m = report.metrics
    c = report.collaboration
    lines: list[str] = []
    lines.append(PROFILE_BANNER)
    lines.append("")
    lines.append(f"User: {report.user}   Period: {report.period_label}")
    lines.append(f"Project: {report.project_name}")
    lines.append("")
    lines.append("Overview")
    lines.append("-" * 72)
    lines.append(f"Commits:        {fmt_int(report.commits):>12}  (days worked {report.days_worked}, longest streak {report.max_streak} days)")
    lines.append(f"Lines added:    {fmt_int(report.lines_added):>12}")
    lines.append(f"Lines removed:  {fmt_int(report.lines_removed):>12}")
    lines.append(
        f"Share of repo:  {report.contribution_ratio:>11.1f}%  "
        f"({fmt_int(report.project_total_commits)} commits by {report.project_authors} authors, beats {m.beat_percent}%)"
    )
    lines.append(f"Mood:           {report.mood}")
    lines.append("")
    lines.append("Metrics")
    lines.append("-" * 72)
    lines.append(f"Innovation ratio:     {m.innovation_ratio:6.1f}")
    lines.append(f"Refinement impact:    {m.refinement_impact:6.1f}")
    lines.append(f"Code health index:    {m.code_health_index:6.1f}")
    lines.append(f"Tech breadth:         {m.tech_breadth:6.1f}")
    lines.append(f"Stability score:      {m.stability_score:6.1f}")
    lines.append(f"Interweaving score:   {c.interweaving_score:6.1f}  ({c.files_sampled} files sampled)")
    lines.append(f"Sole maintenance:     {c.sole_maintenance_index:6.1f}")
    lines.append("")
    lines.append("Radar")
    lines.append("-" * 72)
    for axis, value in report.radar.as_dict().items():
        lines.append(f"{axis:<14} {bar(value, 100)} {value:>3}%")
    lines.append("")
    lines.append("Time capsule")
    lines.append("-" * 72)
    if report.latest_moment is not None:
        lines.append(f"Latest night commit: {format_ts(report.latest_moment.timestamp)}  {trunc(report.latest_moment.message, 40)}")
    if report.longest_day.date:
        lines.append(f"Longest day:         {report.longest_day.date} ({report.longest_day.value:.1f} hours)")
    if report.max_commits_per_day.date:
        lines.append(f"Busiest day:         {report.max_commits_per_day.date} ({int(report.max_commits_per_day.value)} commits)")
    lines.append(f"Peak hour:           {report.peak_hour:02d}:00{'   weekend warrior' if report.weekend_warrior else ''}")
    max_month = max(report.months) if report.months else 0
    for label, n in zip(MONTH_LABELS, report.months):
        lines.append(f"  {label} {bar(n, max_month, width=30)} {fmt_int(n)}")
    lines.append("")
    if report.top_extensions:
        lines.append("Top extensions: " + ", ".join(f".{ext} ({n})" for ext, n in report.top_extensions))
    if report.keywords:
        lines.append("Keywords:       " + ", ".join(k for k, _n in report.keywords[:5]))
    if report.badges:
        lines.append("Badges:         " + ", ".join(report.badges))
    lines.append("")
    lines.append("Milestones")
    lines.append("-" * 72)
    for ms in report.milestones:
        lines.append(f"{ms.kind:<16} {ms.date:<18} {trunc(ms.detail, 36)}")

    if report.project_shares:
        lines.append("")
        lines.append("Projects")
        lines.append("-" * 72)
        max_share = max(s.share for s in report.project_shares)
        for rank, s in enumerate(report.project_shares, start=1):
            lines.append(f"#{rank:<3} {trunc(s.name, 24):<24} {bar(s.share, max_share, width=15)} {s.share:5.1f}%")

    if report.role is not None:
        lines.append("")
        lines.append(f"Role: {report.role.role}")
        lines.append(f"  {report.role.narrative}")
        for item in report.role.evidence:
            lines.append(f"  - {item}")
    return "\n".join(lines) + "\n"
