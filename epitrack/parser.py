"""
Snapshot row parser
===================

Turns one raw CSV row of a daily report into a `ParsedRow`:

    Province/State, Country/Region, Last Update, Confirmed, Deaths, Recovered

Key ideas:
- A small regex tokenizer splits the row. Double-quoted spans may contain
  commas ("Cook County, IL"); the embedded comma is dropped so the compound
  stays ONE field ("Cook County IL").
- The row always yields exactly six fields (padded / truncated).
- Count fields never raise: blanks and garbage become 0.
- Historical region names are mapped to the canonical name via `ALIASES`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List
import re

NUM_FIELDS = 6

ALIASES: Dict[str, str] = {
    "Mainland China": "China",
    "Republic of Korea": "South Korea",
}

# field := "quoted text" | bare text ; followed by a comma or end of line
_FIELD_RE = re.compile(
    r"""
    [ \t]*(?:
        "(?P<QUOTED>[^"]*)" |
        (?P<BARE>[^,"]*)
    )[ \t]*
    (?P<SEP>,|$)
    """,
    re.VERBOSE,
)

_COUNT_RE = re.compile(r"^([+-]?\d+)(?:\.0*)?$")

@dataclass(frozen=True)
class ParsedRow:
    region: str
    confirmed: int
    deaths: int
    recovered: int

def split_fields(line: str) -> List[str]:
    """Split one CSV row into stripped fields, honouring double-quoted spans."""
    line = line.rstrip("\r\n")
    out: List[str] = []
    pos = 0
    while True:
        m = _FIELD_RE.match(line, pos)
        if m is None:
            # Stray text around quotes: cut at the next comma outside the quoted span.
            search = pos
            if line[pos:].lstrip(" \t").startswith('"'):
                close = line.find('"', line.index('"', pos) + 1)
                if close >= 0:
                    search = close + 1
            end = line.find(",", search)
            chunk = line[pos:] if end < 0 else line[pos:end]
            out.append(chunk.replace('"', "").replace(",", "").strip())
            if end < 0:
                break
            pos = end + 1
            continue
        if m.group("QUOTED") is not None:
            out.append(m.group("QUOTED").replace(",", "").strip())
        else:
            out.append(m.group("BARE").strip())
        if m.group("SEP") == "":
            break
        pos = m.end()
    return out

def _to_count(x: str) -> int:
    """Convert a count cell to a non-negative int, returning 0 if blank/invalid.

    Only integers are accepted; a bare ".0" suffix ("12.0") is tolerated.
    """
    if not x: return 0
    m = _COUNT_RE.match(x)
    if m is None: return 0
    v = int(m.group(1))
    return v if v > 0 else 0

def canonical_region(name: str) -> str:
    name = name.strip()
    return ALIASES.get(name, name)

def parse_row(line: str) -> ParsedRow:
    """Parse one snapshot row (header already discarded)."""
    fields = split_fields(line)
    fields = (fields + [""] * NUM_FIELDS)[:NUM_FIELDS]
    _sub_region, region, _last_update, confirmed, deaths, recovered = fields
    return ParsedRow(
        region=canonical_region(region),
        confirmed=_to_count(confirmed),
        deaths=_to_count(deaths),
        recovered=_to_count(recovered),
    )
