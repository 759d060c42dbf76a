"""
epitrack Command Line Interface (CLI)
=====================================

This file provides the interactive terminal program you run like:

    python -m epitrack.cli --reports ./daily_reports/ --facts ./worldfacts/

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to QueryEngine methods

The CLI does not modify the daily reports. It reads them once and answers
every command from the in-memory store.
"""

from __future__ import annotations
import argparse, logging, os, shlex, sys
from typing import Callable, List, Optional
from .config import AnalysisConfig, configure_logging
from .engine import QueryEngine
from .facts import FactTableError, load_world_facts
from .loader import IngestionError, load_daily_reports
from .timeline import render_timeline

log = logging.getLogger(__name__)

HELP = """
Available commands:
  <name>: enter a country name such as US or China
  countries: list all countries and most recent report
  top10: list of top 10 countries based on most recent # of confirmed cases
  top <n>: same as top10, for n countries
  totals: world-wide totals of confirmed, deaths, recovered
  model: generate exponential model for the number of confirmed cases worldwide
  export csv "<out.csv>" | export json "<out.json>"
  report "<out.docx>"
  # (or quit): exit
"""

BANNER = """** COVID-19 Data Analysis **

Based on data made available by John Hopkins University
https://github.com/CSSEGISandData/COVID-19
"""


def build_engine(cfg: AnalysisConfig) -> QueryEngine:
    """Load daily reports + world facts and wrap them in a QueryEngine.

    Raises IngestionError / FactTableError on fatal input problems.
    """
    store = load_daily_reports(cfg.reports_dir)
    facts = load_world_facts(store, cfg.population_path, cfg.life_expectancy_path)
    print(f">> Processed {len(store.dates)} daily reports")
    print(f">> Processed {facts} files of world facts")
    print(f">> Current data on {len(store)} countries")
    print()
    return QueryEngine(
        store=store,
        world_population=cfg.world_population,
        timeline_window=cfg.timeline_window,
        timeline_edge=cfg.timeline_edge,
    )


def _parse_args(argv: Optional[List[str]]) -> AnalysisConfig:
    cfg = AnalysisConfig()
    ap = argparse.ArgumentParser(prog="epitrack", description="Analyze daily epidemic snapshot reports.")
    ap.add_argument("--reports", default=cfg.reports_dir, help="Folder with MM-DD-YYYY.csv daily reports")
    ap.add_argument("--facts", default=cfg.facts_dir, help="Folder with populations.csv / life_expectancies.csv")
    ap.add_argument("--world-population", type=int, default=cfg.world_population)
    ap.add_argument("--top", type=int, default=cfg.top_n, help="Size of the top10 listing")
    ap.add_argument("--log-level", default=cfg.log_level)
    args = ap.parse_args(argv)
    cfg.reports_dir = args.reports
    cfg.facts_dir = args.facts
    cfg.world_population = args.world_population
    cfg.top_n = args.top
    cfg.log_level = args.log_level
    return cfg


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the epitrack CLI.

    1) Load daily reports and world facts
    2) Start an interactive REPL
    """
    cfg = _parse_args(argv)
    configure_logging(cfg.log_level)

    print(BANNER)
    try:
        engine = build_engine(cfg)
    except (IngestionError, FactTableError) as e:
        log.error("%s", e)
        print(str(e))
        return 1

    while True:
        try:
            line = input("Enter command (help for list, # to quit)> ").strip()
        except EOFError:
            break
        if not line:
            continue
        if line in ("#", "quit", "exit"):
            break
        if line.split()[0].lower() not in ("help", "report"):
            engine.command_log.append(line)
        try:
            handle(engine, line, top_n=cfg.top_n, folder=cfg.reports_dir)
        except Exception as e:
            print(f"Error: {e}")
        print()
    return 0


def handle(
    engine: QueryEngine,
    line: str,
    *,
    top_n: int = 10,
    folder: Optional[str] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> None:
    """Handle one CLI command line.

    Built-in commands are checked first, then exact region names.
    """
    line = line.strip()
    if not line:
        return
    cmd = line.lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "totals":
        t = engine.totals()
        print(f"As of {t.date}, the world-wide totals are:")
        print(f" confirmed: {t.confirmed:,}")
        print(f" deaths: {t.deaths:,} ({t.death_pct:.2f}%)")
        print(f" recovered: {t.recovered:,} ({t.recovered_pct:.2f}%)")
        return

    if cmd == "countries":
        for r in engine.list_regions():
            print(f"{r.name}: {r.confirmed:,}, {r.deaths:,}, {r.recovered:,}")
        return

    if cmd == "top10" or cmd.startswith("top "):
        n = top_n if cmd == "top10" else int(cmd.split()[1])
        for i, (name, confirmed) in enumerate(engine.top_n(n), start=1):
            print(f"{i}. {name}: {confirmed:,}")
        return

    if cmd == "model":
        _print_model(engine)
        return

    if engine.has_region(line):
        _print_region(engine, line, prompt)
        return

    try:
        parts = shlex.split(line)
    except ValueError:
        # unbalanced quote, e.g. a mistyped "Cote d'Ivoire"
        parts = [line]
    head = parts[0].lower()

    if head == "export":
        # export <csv|json> "<path>"
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt, out_path = parts[1].lower(), parts[2]
        if fmt == "csv":
            n = engine.export_csv(out_path)
        elif fmt == "json":
            n = engine.export_json(out_path)
        else:
            print("Unknown export format. Use: csv or json")
            return
        print(f"Exported {n} countries to {out_path}")
        return

    if head == "report":
        from .report import DatasetCitation, ReportConfig, generate_docx_report
        if len(parts) < 2:
            print('Usage: report "out.docx"')
            return
        cfg = ReportConfig(
            top_n=top_n,
            citation=DatasetCitation(folder_name=os.path.basename(os.path.normpath(folder)) if folder else None),
            command_log=engine.command_log,
        )
        generate_docx_report(engine, parts[1], config=cfg)
        print(f"Report written to {parts[1]}")
        return

    print("country or command not found...")


def _print_model(engine: QueryEngine) -> None:
    fit = engine.model()
    if not fit.ok:
        print(f"Cannot generate a model: {fit.error}")
        return
    print(f"Data is modeled by: y = {fit.a:.2f}e^{fit.b:.2f}X")
    print()
    print(f"At current rate of infection (as of {engine.current_date}):")
    if fit.days_until_saturation is None:
        print("Confirmed cases are not growing; the whole world is never reached.")
    else:
        print(f"Number of days required to infect the whole world: {int(fit.days_until_saturation):,}")
    print()
    print("The above model is only a simple attempt of extrapolating data....")
    print("The spread of a real epidemic depends on a lot more factors "
          "and cannot be modeled by an exponential curve")


def _print_region(engine: QueryEngine, name: str, prompt: Optional[Callable[[str], str]]) -> None:
    snap = engine.region_snapshot(name)
    print(f"Population: {snap.population:,}")
    print(f"Life Expectancy: {snap.life_expectancy:.2f} years")
    print("Latest Data: ")
    print(f" confirmed: {snap.latest.confirmed:,}")
    print(f" deaths: {snap.latest.deaths:,}")
    print(f" recovered: {snap.latest.recovered:,}")
    print(f"First confirmed case: {snap.first_confirmed or 'none'}")
    print(f"First recorded death: {snap.first_death or 'none'}")

    try:
        option = (prompt or input)("Do you want to see a timeline? Enter c/d/r/n> ").strip().lower()
    except EOFError:
        return
    if option in ("c", "d", "r"):
        print(render_timeline(engine.timeline(name, option)))


if __name__ == "__main__":
    sys.exit(main())
