"""
Day arithmetic for the observation window
=========================================

Snapshot files are named after the day they describe (`01-22-2020.csv`).
The dataset only covers January to March, so instead of a full calendar we map
each date to a dense "day index" using a small offset table:

- January:  day - 21   (01-22 is day 1)
- February: 10 + day   (02-01 is day 11)
- March:    39 + day   (03-01 is day 40)

Dates outside the table map to 0. Widening the window means adding rows to
`_MONTH_OFFSETS`, not changing the functions below.
"""

from __future__ import annotations
import os
from typing import Dict, Optional, Tuple

_MONTH_OFFSETS: Dict[str, int] = {
    "01": -21,
    "02": 10,
    "03": 39,
}

def _split(date: str) -> Optional[Tuple[str, int]]:
    parts = date.strip().split("-")
    if len(parts) < 2:
        return None
    try:
        return parts[0], int(parts[1])
    except ValueError:
        return None

def day_index(date: str) -> int:
    """Return the day number of a `MM-DD[-YYYY]` date (0 if out of window)."""
    parsed = _split(date)
    if parsed is None:
        return 0
    month, day = parsed
    offset = _MONTH_OFFSETS.get(month)
    if offset is None:
        return 0
    return offset + day

def day_difference(a: str, b: str) -> int:
    """Number of days from `b` to `a` (negative if `a` comes first)."""
    return day_index(a) - day_index(b)

def date_label(filename: str) -> str:
    """Extract the date label from a snapshot filename.

    The label runs from the first digit of the basename up to the extension
    dot, e.g. `daily/01-22-2020.csv` -> `01-22-2020`.
    """
    name = os.path.basename(filename)
    start = next((i for i, ch in enumerate(name) if ch.isdigit()), None)
    if start is None:
        raise ValueError(f"No date in snapshot filename: {filename!r}")
    end = name.rfind(".")
    if end <= start:
        end = len(name)
    return name[start:end]
