"""
Aggregation store (ingestion)
=============================

The store is the in-memory model of the whole dataset:

    region name -> RegionEntry (per-date series + first-occurrence dates + facts)

It is built once, one snapshot day at a time, in the order the caller gives
(chronological). After `finalize()` it is read-only.

Ingestion of one day:
1) Discard the header row.
2) Parse each row and SUM its counts into that day's record for the region
   (a region can have many province/state rows per day).
3) Keep a running world confirmed total -> one `DailyWorldSample` per day.
4) Set first-occurrence dates (set-once) for metrics that became positive.

A day is parsed into a scratch map first and only committed at the end, so a
day is never half-ingested.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
import logging
from .dates import day_index
from .models import DailyRecord, DailyWorldSample, RegionEntry
from .parser import parse_row

log = logging.getLogger(__name__)

Payload = Union[str, Iterable[str]]

def _lines(payload: Payload) -> Iterator[str]:
    if isinstance(payload, str):
        return iter(payload.splitlines())
    return iter(payload)

@dataclass
class AggregationStore:
    """Builder and container for the per-region time series."""
    regions: Dict[str, RegionEntry] = field(default_factory=dict)
    # ingested snapshot dates, in ingestion order
    dates: List[str] = field(default_factory=list)
    samples: List[DailyWorldSample] = field(default_factory=list)
    _finalized: bool = field(default=False, init=False, repr=False)

    # ---------------- Ingestion ----------------
    def ingest_day(self, date: str, payload: Payload) -> DailyWorldSample:
        """Ingest one day's snapshot (full text or an iterable of lines)."""
        if self._finalized:
            raise RuntimeError("store is finalized; no more snapshots can be ingested")
        if self.dates and date < self.dates[-1]:
            log.warning("Snapshot %s ingested after %s (out of order)", date, self.dates[-1])

        lines = _lines(payload)
        next(lines, None)  # header

        day: Dict[str, DailyRecord] = {}
        total = 0
        rows = 0
        for line in lines:
            if not line.strip():
                continue
            row = parse_row(line)
            # the world total counts every row, even those without a region
            total += row.confirmed
            rows += 1
            if not row.region:
                log.debug("Row without region on %s: %r", date, line)
                continue
            day.setdefault(row.region, DailyRecord()).add(row.confirmed, row.deaths, row.recovered)

        for region, rec in day.items():
            entry = self.regions.setdefault(region, RegionEntry())
            entry.slot(date).add(rec.confirmed, rec.deaths, rec.recovered)
            entry.mark_first_occurrences(date)

        sample = DailyWorldSample(day_index=day_index(date), total_confirmed=total)
        self.dates.append(date)
        self.samples.append(sample)
        log.debug("Ingested %s: %d rows, %d regions, %d confirmed", date, rows, len(day), total)
        return sample

    def ingest(self, snapshots: Iterable[Tuple[str, Payload]]) -> "AggregationStore":
        for date, payload in snapshots:
            self.ingest_day(date, payload)
        return self

    def finalize(self) -> "AggregationStore":
        self._finalized = True
        return self

    # ---------------- Read access ----------------
    @property
    def current_date(self) -> Optional[str]:
        """The most recently ingested snapshot date."""
        return self.dates[-1] if self.dates else None

    def region_names(self) -> List[str]:
        return sorted(self.regions)

    def get(self, name: str) -> Optional[RegionEntry]:
        return self.regions.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.regions

    def __len__(self) -> int:
        return len(self.regions)

def build_store(snapshots: Iterable[Tuple[str, Payload]]) -> AggregationStore:
    """Ingest an ordered list of (date, payload) pairs and return the finalized store."""
    store = AggregationStore().ingest(snapshots)
    log.info("Processed %d daily reports, %d regions", len(store.dates), len(store))
    return store.finalize()
