"""
Query engine
============

Read-only views over a finalized `AggregationStore`:

1) totals       -> world-wide confirmed/deaths/recovered (+ percentages)
2) list_regions -> every region's counts, alphabetical
3) top_n        -> regions ranked by confirmed cases (heap / top-k)
4) snapshot     -> one region's facts, first dates and latest record
5) timeline     -> one metric of one region over time (see timeline.py)
6) model        -> exponential trend fit (see trend.py)

Every query defaults to the store's current date (the last snapshot). The
engine never raises for odd-but-valid input: unknown regions give None or an
empty timeline, and a zero confirmed total gives 0% instead of a division
error.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import heapq
import logging
from .models import DailyRecord, metric_name
from .store import AggregationStore
from .timeline import EDGE, WINDOW_DAYS, Timeline, build_timeline
from .trend import WORLD_POPULATION, TrendFit, fit_trend

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class WorldTotals:
    date: Optional[str]
    confirmed: int
    deaths: int
    recovered: int
    death_pct: float
    recovered_pct: float

@dataclass(frozen=True)
class RegionCounts:
    name: str
    confirmed: int
    deaths: int
    recovered: int

@dataclass(frozen=True)
class RegionSnapshot:
    """What the CLI shows for `<region name>`."""
    name: str
    population: int
    life_expectancy: float
    first_confirmed: Optional[str]
    first_death: Optional[str]
    first_recovery: Optional[str]
    latest_date: Optional[str]
    latest: DailyRecord

@dataclass
class QueryEngine:
    """Queries over one analysis session's store."""
    store: AggregationStore
    world_population: int = WORLD_POPULATION
    timeline_window: int = WINDOW_DAYS
    timeline_edge: int = EDGE
    # Stores REPL commands (for reproducibility in reports)
    command_log: List[str] = field(default_factory=list)

    @property
    def current_date(self) -> Optional[str]:
        return self.store.current_date

    def _date(self, date: Optional[str]) -> Optional[str]:
        return date if date is not None else self.store.current_date

    def has_region(self, name: str) -> bool:
        return name in self.store

    # ---------------- World / lists ----------------
    def totals(self, date: Optional[str] = None) -> WorldTotals:
        d = self._date(date)
        confirmed = deaths = recovered = 0
        if d is not None:
            for entry in self.store.regions.values():
                rec = entry.counts(d)
                confirmed += rec.confirmed
                deaths += rec.deaths
                recovered += rec.recovered
        death_pct = deaths * 100.0 / confirmed if confirmed else 0.0
        recovered_pct = recovered * 100.0 / confirmed if confirmed else 0.0
        return WorldTotals(d, confirmed, deaths, recovered, death_pct, recovered_pct)

    def list_regions(self, date: Optional[str] = None) -> List[RegionCounts]:
        d = self._date(date)
        out: List[RegionCounts] = []
        for name in self.store.region_names():
            rec = self.store.regions[name].counts(d) if d is not None else DailyRecord()
            out.append(RegionCounts(name, rec.confirmed, rec.deaths, rec.recovered))
        return out

    def top_n(self, n: int, date: Optional[str] = None) -> List[Tuple[str, int]]:
        """Regions with the most confirmed cases, highest first.

        Ties keep alphabetical order; n larger than the number of regions
        returns every region.
        """
        if n <= 0:
            return []
        rows = [(r.name, r.confirmed) for r in self.list_regions(date)]
        # nlargest is stable (same as sorted(..., reverse=True)[:n])
        return heapq.nlargest(min(n, len(rows)), rows, key=lambda p: p[1])

    # ---------------- Per region ----------------
    def region_snapshot(self, name: str) -> Optional[RegionSnapshot]:
        entry = self.store.get(name)
        if entry is None:
            return None
        latest_date = entry.latest_date()
        latest = entry.counts(latest_date) if latest_date is not None else DailyRecord()
        return RegionSnapshot(
            name=name,
            population=entry.population,
            life_expectancy=entry.life_expectancy,
            first_confirmed=entry.first_confirmed,
            first_death=entry.first_death,
            first_recovery=entry.first_recovery,
            latest_date=latest_date,
            latest=latest,
        )

    def timeline(self, name: str, metric: str) -> Timeline:
        entry = self.store.get(name)
        current = self.store.current_date
        if entry is None or current is None:
            return Timeline(region=name, metric=metric_name(metric))
        return build_timeline(name, entry, metric, current,
                              window=self.timeline_window, edge=self.timeline_edge)

    # ---------------- Model ----------------
    def model(self) -> TrendFit:
        return fit_trend(self.store.samples, self.store.current_date, self.world_population)

    # ---------------- Export ----------------
    def _export_rows(self, date: Optional[str]) -> List[dict]:
        rows = []
        for r in self.list_regions(date):
            entry = self.store.regions[r.name]
            rows.append({
                "region": r.name,
                "confirmed": r.confirmed,
                "deaths": r.deaths,
                "recovered": r.recovered,
                "population": entry.population,
                "life_expectancy": entry.life_expectancy,
            })
        return rows

    def export_csv(self, path: str, date: Optional[str] = None) -> int:
        """Write the region listing for `date` to CSV. Returns the row count."""
        import csv
        rows = self._export_rows(date)
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["region", "confirmed", "deaths", "recovered", "population", "life_expectancy"])
            for r in rows:
                w.writerow([r["region"], r["confirmed"], r["deaths"], r["recovered"],
                            r["population"], r["life_expectancy"]])
        log.info("Exported %d regions to %s", len(rows), path)
        return len(rows)

    def export_json(self, path: str, date: Optional[str] = None) -> int:
        """Write the region listing for `date` to JSON (with the date it refers to)."""
        import json
        rows = self._export_rows(date)
        payload = {"date": self._date(date), "regions": rows}
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        log.info("Exported %d regions to %s", len(rows), path)
        return len(rows)
