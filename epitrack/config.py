"""
Configuration
=============

Paths and constants for one analysis session. Defaults match the expected
folder layout:

    ./daily_reports/MM-DD-YYYY.csv
    ./worldfacts/populations.csv
    ./worldfacts/life_expectancies.csv

CLI flags override these (see cli.py). The log level defaults to the
`LOG_LEVEL` environment variable (WARNING if unset).
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
from .timeline import EDGE, WINDOW_DAYS
from .trend import WORLD_POPULATION

@dataclass
class AnalysisConfig:
    reports_dir: str = "./daily_reports/"
    facts_dir: str = "./worldfacts/"
    population_file: str = "populations.csv"
    life_expectancy_file: str = "life_expectancies.csv"

    world_population: int = WORLD_POPULATION
    # How many regions the `top10` command shows
    top_n: int = 10
    timeline_window: int = WINDOW_DAYS
    timeline_edge: int = EDGE

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"))

    @property
    def population_path(self) -> str:
        return os.path.join(self.facts_dir, self.population_file)

    @property
    def life_expectancy_path(self) -> str:
        return os.path.join(self.facts_dir, self.life_expectancy_file)

def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging once for the CLI process."""
    logging.basicConfig(
        level=getattr(logging, level.strip().upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
