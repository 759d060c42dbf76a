"""
epitrack package
================

Offline analysis of daily epidemic snapshot reports (one CSV per day).

- The CLI entry point is in `epitrack/cli.py`.
- Ingestion and the per-region time series live in `epitrack/store.py`.
- Queries (totals, top-N, region detail, timelines) are in `epitrack/engine.py`.
- The exponential trend model is in `epitrack/trend.py`.
"""

__version__ = '0.1.0'
