"""
Snapshot loader (daily report folder -> ordered (date, lines) pairs)
====================================================================

This is the file-system side of ingestion:

- Find the daily report files in a folder (regular `.csv` files).
- Sort them by filename. Files are named `MM-DD-YYYY.csv`, so filename order
  is date order, and the last file is the "current date".
- Read each file completely and hand `(date, lines)` to the store.

A snapshot that cannot be read is fatal: we raise `IngestionError` and the
CLI stops. A day is only handed over once the whole file has been read, so
no day is ever ingested partially.
"""

from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple
import logging
import os
from .dates import date_label
from .store import AggregationStore, build_store

log = logging.getLogger(__name__)

class IngestionError(RuntimeError):
    """A daily report could not be found or read; the run cannot continue."""

def list_snapshot_files(folder: str) -> List[str]:
    """Return the full paths of all daily report files in `folder`, sorted."""
    try:
        names = os.listdir(folder)
    except OSError as e:
        raise IngestionError(f"Error opening {folder}: {e}") from e
    files = [os.path.join(folder, n) for n in names
             if n.lower().endswith(".csv") and os.path.isfile(os.path.join(folder, n))]
    files.sort()
    if not files:
        raise IngestionError(f"No daily reports found in {folder}")
    return files

def read_snapshot(path: str) -> List[str]:
    """Read one daily report fully (header included)."""
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Error opening {path}: {e}") from e

def iter_snapshots(files: Sequence[str]) -> Iterator[Tuple[str, List[str]]]:
    """Yield (date label, lines) for each file, in the given order."""
    for path in files:
        try:
            date = date_label(path)
        except ValueError as e:
            raise IngestionError(f"Error opening {path}: {e}") from e
        yield date, read_snapshot(path)

def load_daily_reports(folder: str) -> AggregationStore:
    """Discover, read and ingest every daily report in `folder`."""
    files = list_snapshot_files(folder)
    log.info("Found %d daily reports in %s", len(files), folder)
    return build_store(iter_snapshots(files))
