from __future__ import annotations

"""
epitrack report generator
-------------------------
This module writes a DOCX report for one analysis session.

Design goals:
- Keep epitrack usable even if report dependencies are missing (lazy imports).
- Charts follow the data: the trend chart is only drawn when the model fit
  succeeded, the region histogram only when there are regions with cases.
- The report is built from the same QueryEngine calls the CLI uses, so the
  numbers always match what the user saw on screen.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging
import math
import os
import tempfile

from .engine import QueryEngine

log = logging.getLogger(__name__)


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Minimal dataset citation metadata for the DOCX report."""
    database_name: str = "COVID-19 Data Repository"
    institutional_author: str = "Center for Systems Science and Engineering (CSSE), Johns Hopkins University"
    website: str = "https://github.com/CSSEGISandData/COVID-19"
    folder_name: Optional[str] = None


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "epitrack Report"
    subtitle: str = "Daily snapshot analysis (CLI)"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # How many regions to show in the ranking chart / table
    top_n: int = 10

    # Optional: list of CLI commands run before the report
    command_log: Optional[List[str]] = None


# -----------------------------
# Helpers for clean numeric plots
# -----------------------------

def _positive(values: Sequence[int]) -> List[float]:
    """Keep only strictly positive values (they go through a log)."""
    return [float(v) for v in values if v and v > 0]


def _choose_bins(n: int) -> int:
    """Simple bin heuristic (keeps charts readable for small samples)."""
    if n <= 20:
        return 10
    if n <= 100:
        return 15
    return 30


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    engine: QueryEngine,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report + charts for the engine's current date.

    The daily report files are never modified; everything comes from the
    in-memory store.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e

    store = engine.store
    if not store.dates:
        raise ValueError("Nothing to report on (no daily reports were ingested).")

    # -----------------------------
    # 1) Query everything once
    # -----------------------------
    totals = engine.totals()
    top = engine.top_n(config.top_n)
    fit = engine.model()
    regions = engine.list_regions()
    samples = list(store.samples)

    # -----------------------------
    # 2) Create charts
    # -----------------------------
    tmpdir = tempfile.mkdtemp(prefix="epitrack_report_")
    # Each chart is: (title, file_path, what_it_shows)
    chart_paths: List[Tuple[str, str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(tmpdir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=200)
        plt.close()
        return path

    # World confirmed per day + fitted exponential curve
    xs = [s.day_index for s in samples]
    ys = [s.total_confirmed for s in samples]
    plt.figure()
    plt.scatter(xs, ys, label="Observed")
    if fit.ok:
        grid = np.linspace(min(xs), max(xs), 200)
        plt.plot(grid, fit.a * np.exp(fit.b * grid), color="C1", label="Model")
    if any(y > 0 for y in ys):
        plt.yscale("log")
    plt.title("World confirmed cases by day")
    plt.xlabel("Day")
    plt.ylabel("Confirmed (log scale)")
    plt.legend()
    chart_paths.append((
        "World confirmed cases by day",
        _save("world_confirmed.png"),
        "Each dot is one daily report; the line is the fitted model y = a*e^(bx)."
    ))

    if top:
        plt.figure()
        plt.bar([name for name, _ in top], [c for _, c in top])
        plt.xticks(rotation=45, ha="right")
        plt.title(f"Top {len(top)} regions by confirmed cases ({totals.date})")
        plt.ylabel("Confirmed")
        chart_paths.append((
            f"Top {len(top)} regions by confirmed cases",
            _save("top_regions.png"),
            "Bar chart compares the most affected regions on the current date."
        ))

    confirmed = _positive([r.confirmed for r in regions])
    if confirmed:
        x = np.log10(np.array(confirmed))
        plt.figure()
        counts, bins, patches = plt.hist(x, bins=_choose_bins(len(x)), edgecolor="black", linewidth=0.8)
        for i, p in enumerate(patches):
            p.set_facecolor("C0" if i % 2 == 0 else "C1")
        plt.title("Regions by confirmed cases (log10 scale)")
        plt.xlabel("log10(Confirmed)")
        plt.ylabel("Regions")
        chart_paths.append((
            "Regions by confirmed cases (log10 scale)",
            _save("hist_regions_log.png"),
            "Case counts span several orders of magnitude, so the bins are on a log scale."
        ))

    # -----------------------------
    # 3) Build DOCX report
    # -----------------------------
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Daily reports processed", str(len(store.dates)))
    _kv("Date range", f"{store.dates[0]} to {store.dates[-1]}")
    _kv("Regions", str(len(store)))

    doc.add_paragraph("")
    doc.add_heading(f"World-wide totals as of {totals.date}", level=1)
    t = doc.add_table(rows=1, cols=3)
    t.rows[0].cells[0].text = "Metric"
    t.rows[0].cells[1].text = "Count"
    t.rows[0].cells[2].text = "% of confirmed"
    for name, value, pct in [
        ("Confirmed", totals.confirmed, ""),
        ("Deaths", totals.deaths, f"{totals.death_pct:.2f}%"),
        ("Recovered", totals.recovered, f"{totals.recovered_pct:.2f}%"),
    ]:
        row = t.add_row().cells
        row[0].text = name
        row[1].text = f"{value:,}"
        row[2].text = pct

    if top:
        doc.add_paragraph("")
        doc.add_heading(f"Top {len(top)} regions", level=1)
        t2 = doc.add_table(rows=1, cols=3)
        h = t2.rows[0].cells
        h[0].text = "#"
        h[1].text = "Region"
        h[2].text = "Confirmed"
        for i, (name, c) in enumerate(top, start=1):
            r = t2.add_row().cells
            r[0].text = str(i)
            r[1].text = name
            r[2].text = f"{c:,}"

    doc.add_paragraph("")
    doc.add_heading("Exponential model", level=1)
    if fit.ok:
        doc.add_paragraph(f"Data is modeled by: y = {fit.a:.4f} e^({fit.b:.4f} x), fitted on {fit.points} days.")
        if fit.days_until_saturation is not None and math.isfinite(fit.days_until_saturation):
            doc.add_paragraph(
                f"At the current rate of infection (as of {totals.date}) the model reaches the "
                f"world population ({engine.world_population:,}) in {int(fit.days_until_saturation)} days."
            )
        else:
            doc.add_paragraph("Confirmed cases are not growing; the model has no saturation horizon.")
        doc.add_paragraph(
            "This is only a simple extrapolation. A real epidemic depends on many more "
            "factors and cannot be modeled by an exponential curve."
        )
    else:
        doc.add_paragraph(f"No model could be fitted: {fit.error}")

    doc.add_paragraph("")
    doc.add_heading("Visualizations", level=1)
    for title, path, what in chart_paths:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.5))
        doc.add_paragraph(what)
        doc.add_paragraph("")

    doc.add_heading("Data source", level=1)
    cit = config.citation
    if cit.folder_name:
        doc.add_paragraph(f"Daily reports folder: {cit.folder_name}")
    doc.add_paragraph(f"{cit.institutional_author}. {cit.database_name}. {cit.website}.")

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_paragraph("")
    doc.add_heading("Reproducibility footer", level=1)

    from . import __version__ as epitrack_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_paragraph(f"epitrack version: {epitrack_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")

    if config.command_log:
        doc.add_paragraph("Commands used (log):")
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    log.info("Report written to %s", out_path)
    return out_path
