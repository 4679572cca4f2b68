from __future__ import annotations

import dataclasses
import datetime as dt
import re

_PERIOD_RE = re.compile(r"(?:(?P<year>\d{4})(?P<half>H[12])?|(?P<lead>H[12])(?P<lead_year>\d{4}))", re.IGNORECASE)


@dataclasses.dataclass(frozen=True)
class Period:
    label: str
    start: dt.date  # inclusive
    end: dt.date  # exclusive

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()

    @property
    def since(self) -> str:
        return f"{self.start_iso} 00:00:00"

    @property
    def until(self) -> str:
        # git's --until is inclusive, so stop on the last second of the final day.
        last_day = self.end - dt.timedelta(days=1)
        return f"{last_day.isoformat()} 23:59:59"


def parse_period(spec: str) -> Period:
    m = _PERIOD_RE.fullmatch((spec or "").strip())
    if not m:
        raise ValueError(f"Invalid period: {spec!r} (expected YYYY, YYYYH1, or YYYYH2)")
    year = int(m.group("year") or m.group("lead_year"))
    half = (m.group("half") or m.group("lead") or "").upper()
    if half == "H1":
        return Period(label=f"{year}H1", start=dt.date(year, 1, 1), end=dt.date(year, 7, 1))
    if half == "H2":
        return Period(label=f"{year}H2", start=dt.date(year, 7, 1), end=dt.date(year + 1, 1, 1))
    return Period(label=str(year), start=dt.date(year, 1, 1), end=dt.date(year + 1, 1, 1))


def current_year_period(today: dt.date | None = None) -> Period:
    if today is None:
        today = dt.date.today()
    return parse_period(str(today.year))
