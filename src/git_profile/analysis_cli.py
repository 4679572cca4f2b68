from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .analysis_periods import Period, current_year_period, parse_period
from .analysis_render import render_report
from .analysis_run import report_for_batch, run_batch
from .analysis_write import report_json, write_json
from .config import exclude_dirnames_from_config, heuristics_from_config, load_config
from .errors import ProfileError
from .git import discover_git_roots
from .identity import MeMatcher


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a developer profile from git commit history.")
    parser.add_argument("repos", type=Path, nargs="*", help="Repositories to analyze (default: current directory).")
    parser.add_argument("--root", type=Path, default=None, help="Scan this directory for git repos and merge them.")
    parser.add_argument("--period", type=str, default="", help="Period to analyze (YYYY, YYYYH1, YYYYH2; default: this year).")
    parser.add_argument("--sample", type=int, default=None, help="Number of most-touched files to blame (default: 10).")
    parser.add_argument("--jobs", type=int, default=None, help="Parallel git jobs (default: min(8, cpu count)).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--me-email", type=str, nargs="+", default=None, help="Author email(s) to profile.")
    parser.add_argument("--me-name", type=str, nargs="+", default=None, help="Author name(s) to profile.")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON instead of text.")
    parser.add_argument("--output", type=Path, default=None, help="Write the JSON report to this file.")
    return parser


def _parse_period(value: str) -> Period:
    if not value.strip():
        return current_year_period()
    try:
        return parse_period(value)
    except ValueError as e:
        raise SystemExit(str(e))


def _select_repos(args: argparse.Namespace, config: dict, *, quiet: bool = False) -> list[Path]:
    repos: list[Path] = list(args.repos)
    if args.root is not None:
        root = args.root.resolve()
        if not quiet:
            print(f"Scanning for git repos under: {root}...")
        repos.extend(discover_git_roots(root, exclude_dirnames_from_config(config)))
    if not repos:
        repos = [Path(".")]
    seen: set[Path] = set()
    out: list[Path] = []
    for r in repos:
        key = r.resolve()
        if key not in seen:
            seen.add(key)
            out.append(r)
    return out


def run(args: argparse.Namespace) -> int:
    if args.sample is not None and args.sample <= 0:
        print("Error: --sample must be a positive integer", file=sys.stderr)
        return 2
    period = _parse_period(args.period)
    try:
        config = load_config(args.config)
        heuristics = heuristics_from_config(config, sample_files=args.sample)
    except ValueError as e:
        print(f"Error: invalid config {args.config}: {e}", file=sys.stderr)
        return 2

    emails = list(args.me_email or config.get("me_emails", []) or [])
    names = list(args.me_name or config.get("me_names", []) or [])
    me = MeMatcher.from_values(emails, names) if (emails or names) else None
    jobs = max(1, int(args.jobs or config.get("jobs") or min(8, (os.cpu_count() or 4))))

    quiet = bool(args.json)
    repos = _select_repos(args, config, quiet=quiet)
    if not quiet:
        print(f"Analyzing {len(repos)} repo(s) for period {period.label}...")

    try:
        batch = run_batch(repos, period=period, config=heuristics, me=me, jobs=jobs, quiet=quiet)
        report = report_for_batch(batch, heuristics)
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.suggestion:
            print(f"Hint: {e.suggestion}", file=sys.stderr)
        return 2

    text_json = report_json(report, batch)
    if args.output is not None:
        write_json(args.output, text_json)
        print(f"Wrote report: {args.output}", file=sys.stderr)
    if args.json:
        print(text_json)
    else:
        print(render_report(report), end="")
    return 0


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return run(args)
