"""
Timelines (per-region, per-metric)
==================================

A timeline lists one metric of one region day by day, starting at the first
day that metric was positive and ending at the current date:

    02-02-2020 (day 11): 3
    02-03-2020 (day 12): 5
    ...

`day` counts from the region's FIRST CONFIRMED case (day 1), for every metric.

Long timelines are shortened: if the metric's first date is more than
`WINDOW_DAYS` before the current date we show the first `EDGE` and last
`EDGE` entries with an elision marker in between.

Only dates the region actually has rows for are listed; a missing day is not
shown as a zero.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
from .dates import day_difference
from .models import RegionEntry, metric_name

WINDOW_DAYS = 14
EDGE = 7
ELISION = [" .", " .", " ."]

@dataclass(frozen=True)
class TimelineEntry:
    date: str
    day: int
    value: int

@dataclass(frozen=True)
class Timeline:
    region: str
    metric: str
    head: List[TimelineEntry] = field(default_factory=list)
    # only filled when the timeline is truncated
    tail: List[TimelineEntry] = field(default_factory=list)
    truncated: bool = False

    @property
    def entries(self) -> List[TimelineEntry]:
        return self.head + self.tail

    def __len__(self) -> int:
        return len(self.head) + len(self.tail)

def build_timeline(
    region: str,
    entry: RegionEntry,
    metric: str,
    current_date: str,
    window: int = WINDOW_DAYS,
    edge: int = EDGE,
) -> Timeline:
    """Extract and window the timeline of `metric` for one region."""
    m = metric_name(metric)
    first = entry.first_date(m)
    if first is None:
        return Timeline(region=region, metric=m)

    base = entry.first_confirmed or first
    out: List[TimelineEntry] = []
    for d in entry.dates_between(first, current_date):
        out.append(TimelineEntry(date=d, day=day_difference(d, base) + 1, value=entry.series[d].value(m)))

    if day_difference(current_date, first) > window and len(out) > 2 * edge:
        return Timeline(region=region, metric=m, head=out[:edge], tail=out[-edge:], truncated=True)
    return Timeline(region=region, metric=m, head=out)

def render_timeline(tl: Timeline) -> str:
    """Format a timeline the way the CLI prints it."""
    lines = [f"{tl.metric.capitalize()}:"]

    def _line(e: TimelineEntry) -> str:
        return f"{e.date} (day {e.day}): {e.value:,}"

    lines.extend(_line(e) for e in tl.head)
    if tl.truncated:
        lines.extend(ELISION)
        lines.extend(_line(e) for e in tl.tail)
    return "\n".join(lines)
