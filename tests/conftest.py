"""
Shared pytest fixtures.

Snapshots are built in memory as (date, text) pairs; dates use the
`MM-DD-2020` labels of the daily report files.
"""

from __future__ import annotations

from typing import Callable, List, Sequence

import pytest

HEADER = "Province/State,Country/Region,Last Update,Confirmed,Deaths,Recovered"


def label_for(day: int) -> str:
    """Inverse of day_index for the January-March 2020 window."""
    if day <= 10:
        return f"01-{day + 21:02d}-2020"
    if day <= 39:
        return f"02-{day - 10:02d}-2020"
    return f"03-{day - 39:02d}-2020"


def payload(rows: Sequence[str]) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


@pytest.fixture()
def day_label() -> Callable[[int], str]:
    return label_for


@pytest.fixture()
def make_payload() -> Callable[[Sequence[str]], str]:
    return payload


@pytest.fixture()
def three_day_snapshots() -> List[tuple]:
    """Three consecutive days, four regions, a couple of province rows."""
    return [
        ("01-22-2020", payload([
            "Hubei,Mainland China,1/22/2020 17:00,444,17,28",
            "Beijing,Mainland China,1/22/2020 17:00,14,,",
            ",Japan,1/22/2020 17:00,2,,",
            ",US,1/22/2020 17:00,0,,",
        ])),
        ("01-23-2020", payload([
            "Hubei,China,1/23/2020 17:00,444,17,28",
            "Beijing,China,1/23/2020 17:00,22,,",
            ",Japan,1/23/2020 17:00,2,,",
            '"Chicago, IL",US,1/23/2020 17:00,1,,',
        ])),
        ("01-24-2020", payload([
            "Hubei,China,1/24/2020 17:00,549,24,31",
            "Beijing,China,1/24/2020 17:00,36,,1",
            ",Japan,1/24/2020 17:00,2,,1",
            '"Chicago, IL",US,1/24/2020 17:00,1,,',
            '"Seattle, WA",US,1/24/2020 17:00,1,,',
            ",Republic of Korea,1/24/2020 17:00,2,,",
        ])),
    ]
