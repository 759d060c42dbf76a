"""
World facts (population / life expectancy)
==========================================

Static per-country tables are merged into the store after ingestion:

    Index, Country, Population
    Index, Country, LifeExpectancy

Key ideas:
- Tables are read with pandas (CSV, or Excel via openpyxl).
- Conversion helpers (_to_int/_to_float/_to_str) turn blanks/garbage into 0.
- Merge is by EXACT region name; rows for regions we never saw are skipped.
- Merging sets the field (never adds), so re-applying a table is harmless.
- The life-expectancy table is required; the population table is optional.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import logging
import os
import pandas as pd
from .store import AggregationStore

log = logging.getLogger(__name__)

class FactTableError(RuntimeError):
    """A required fact table could not be read."""

@dataclass(frozen=True)
class FactRow:
    position: int
    region: str
    value: Union[int, float]

def _to_int(x) -> int:
    if pd.isna(x): return 0
    try: return int(float(x))
    except (TypeError, ValueError, OverflowError): return 0

def _to_float(x) -> float:
    if pd.isna(x): return 0.0
    try: return float(x)
    except (TypeError, ValueError): return 0.0

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _read_table(path: str) -> pd.DataFrame:
    if path.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(path, engine="openpyxl", dtype=str)
    # a malformed row is reported and dropped, never fatal for the whole table
    return pd.read_csv(path, dtype=str, skipinitialspace=True, on_bad_lines="warn")

def load_fact_table(path: str, kind: str = "int") -> List[FactRow]:
    """Read a 3-column fact table (index, region, value).

    `kind` is "int" (population) or "float" (life expectancy).
    Raises FactTableError if the file cannot be read.
    """
    if kind not in ("int", "float"):
        raise ValueError("kind must be 'int' or 'float'")
    try:
        df = _read_table(path)
    except (OSError, ValueError) as e:
        raise FactTableError(f"Could not open {path}: {e}") from e
    if df.shape[1] < 3:
        raise FactTableError(f"{path}: expected 3 columns (index, region, value), got {list(df.columns)}")

    conv = _to_int if kind == "int" else _to_float
    rows: List[FactRow] = []
    for _, r in df.iterrows():
        region = _to_str(r.iloc[1])
        if not region:
            continue
        rows.append(FactRow(position=_to_int(r.iloc[0]), region=region, value=conv(r.iloc[2])))
    return rows

def _enrich(store: AggregationStore, rows: Sequence[FactRow], attr: str) -> int:
    matched = 0
    for row in rows:
        entry = store.get(row.region)
        if entry is None:
            log.debug("No region %r for %s fact (row %d)", row.region, attr, row.position)
            continue
        setattr(entry, attr, row.value)
        matched += 1
    return matched

def enrich_population(store: AggregationStore, rows: Sequence[FactRow]) -> int:
    """Set `population` for every matching region. Returns the match count."""
    return _enrich(store, [FactRow(r.position, r.region, int(r.value)) for r in rows], "population")

def enrich_life_expectancy(store: AggregationStore, rows: Sequence[FactRow]) -> int:
    """Set `life_expectancy` for every matching region. Returns the match count."""
    return _enrich(store, [FactRow(r.position, r.region, float(r.value)) for r in rows], "life_expectancy")

def load_world_facts(
    store: AggregationStore,
    population_path: Optional[str],
    life_expectancy_path: str,
) -> int:
    """Load both fact tables into `store`. Returns the number of fact files read.

    A missing population file is tolerated (populations stay 0);
    a missing life-expectancy file raises FactTableError.
    """
    files = 0
    if population_path and os.path.exists(population_path):
        try:
            n = enrich_population(store, load_fact_table(population_path, "int"))
        except FactTableError as e:
            log.warning("%s; populations left at 0", e)
        else:
            log.info("Populations set for %d regions", n)
            files += 1
    else:
        log.warning("Population table not found (%s); populations left at 0", population_path)

    if not os.path.exists(life_expectancy_path):
        raise FactTableError(f"Could not open {life_expectancy_path}")
    n = enrich_life_expectancy(store, load_fact_table(life_expectancy_path, "float"))
    log.info("Life expectancies set for %d regions", n)
    files += 1
    return files
