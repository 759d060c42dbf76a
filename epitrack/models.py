"""
Data model (DailyRecord / RegionEntry / DailyWorldSample)
=========================================================

Each region (country/territory) gets one `RegionEntry`. Inside it we keep a
per-date series of `DailyRecord` counts.

Why a separate sorted list of dates?
- "Latest data" and timeline windows depend on chronological order.
- We keep `dates` sorted explicitly (with `bisect.insort`) so the order is an
  invariant of the entry, not a side effect of dict insertion order.

Date keys are `MM-DD-YYYY` labels. Inside the three-month window they sort
lexicographically in chronological order.
"""

from __future__ import annotations
from bisect import bisect_left, bisect_right, insort
from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Short CLI options -> metric attribute names
METRICS: Dict[str, str] = {
    "c": "confirmed",
    "d": "deaths",
    "r": "recovered",
}

def metric_name(option: str) -> str:
    """Normalize `c`/`d`/`r` (or the full metric name) to the attribute name."""
    o = option.strip().lower()
    if o in METRICS:
        return METRICS[o]
    if o in METRICS.values():
        return o
    raise ValueError("metric must be: c (confirmed), d (deaths), r (recovered)")

@dataclass
class DailyRecord:
    """Counts for one region on one day. Rows for the same day are summed."""
    confirmed: int = 0
    deaths: int = 0
    recovered: int = 0

    def add(self, confirmed: int, deaths: int, recovered: int) -> None:
        self.confirmed += confirmed
        self.deaths += deaths
        self.recovered += recovered

    def value(self, metric: str) -> int:
        return getattr(self, metric_name(metric))

@dataclass
class RegionEntry:
    """Everything we know about one region."""
    series: Dict[str, DailyRecord] = field(default_factory=dict)
    # sorted keys of `series`
    dates: List[str] = field(default_factory=list)
    first_confirmed: Optional[str] = None
    first_death: Optional[str] = None
    first_recovery: Optional[str] = None
    population: int = 0
    life_expectancy: float = 0.0

    def record(self, date: str) -> Optional[DailyRecord]:
        """Return the record for `date`, or None if the region had no row that day."""
        return self.series.get(date)

    def counts(self, date: str) -> DailyRecord:
        """Like `record`, but a missing day reads as zeros."""
        rec = self.series.get(date)
        return rec if rec is not None else DailyRecord()

    def slot(self, date: str) -> DailyRecord:
        """Return the (mutable) record for `date`, creating it on first touch."""
        rec = self.series.get(date)
        if rec is None:
            rec = DailyRecord()
            self.series[date] = rec
            insort(self.dates, date)
        return rec

    def latest_date(self) -> Optional[str]:
        return self.dates[-1] if self.dates else None

    def dates_between(self, d1: str, d2: str) -> List[str]:
        """Return the series dates in [d1, d2], in order (binary search)."""
        lo = bisect_left(self.dates, d1)
        hi = bisect_right(self.dates, d2)
        return self.dates[lo:hi]

    def first_date(self, metric: str) -> Optional[str]:
        m = metric_name(metric)
        if m == "confirmed":
            return self.first_confirmed
        if m == "deaths":
            return self.first_death
        return self.first_recovery

    def mark_first_occurrences(self, date: str) -> None:
        """Record `date` as first-occurrence for every metric that just became positive."""
        rec = self.series.get(date)
        if rec is None:
            return
        if rec.confirmed > 0 and self.first_confirmed is None:
            self.first_confirmed = date
        if rec.deaths > 0 and self.first_death is None:
            self.first_death = date
        if rec.recovered > 0 and self.first_recovery is None:
            self.first_recovery = date

@dataclass(frozen=True)
class DailyWorldSample:
    """(day index, world confirmed total) for one ingested snapshot."""
    day_index: int
    total_confirmed: int
