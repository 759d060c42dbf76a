"""
Exponential trend model
=======================

A deliberately simple model of world confirmed cases:

    y = a * e^(b x)    <=>    ln y = A + b x,   a = e^A

where x is the day index and y the world confirmed total of that day.
A and b come from ordinary least squares on (x, ln y):

    A = (Sx2*Sy - Sx*Sxy) / (n*Sx2 - Sx^2)
    b = (n*Sxy - Sx*Sy)   / (n*Sx2 - Sx^2)

The fit is then extrapolated to the day the curve reaches the world
population (`days_until_saturation`, counted from the current date).

This is an extrapolation toy, not an epidemic model.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence
import math
import numpy as np
from .dates import day_index
from .models import DailyWorldSample

# World population as of 12:00 CDT 03/29/2020 (US Census Bureau population clock)
WORLD_POPULATION = 7_639_708_031

@dataclass(frozen=True)
class TrendFit:
    """Result of `fit_trend`. On failure the numbers are None and `error` says why."""
    a: Optional[float]
    b: Optional[float]
    intercept: Optional[float]  # A = ln(a)
    points: int
    days_until_saturation: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def predict(self, x: float) -> Optional[float]:
        """Model value a*e^(b x), or None if the fit failed."""
        if self.a is None or self.b is None:
            return None
        return self.a * math.exp(self.b * x)

def fit_trend(
    samples: Sequence[DailyWorldSample],
    current_date: Optional[str] = None,
    world_population: int = WORLD_POPULATION,
) -> TrendFit:
    """Fit ln(confirmed) = A + b*day over the samples.

    Days with zero confirmed cases have no logarithm and are left out of the
    fit. Fewer than two distinct days cannot define a line; that case returns
    a TrendFit with `error` set instead of raising.
    """
    usable = [s for s in samples if s.total_confirmed > 0]
    if not usable:
        return TrendFit(a=None, b=None, intercept=None, points=0,
                        error="No days with confirmed cases to fit.")

    x = np.array([s.day_index for s in usable], dtype=float)
    y = np.log(np.array([s.total_confirmed for s in usable], dtype=float))
    n = len(usable)

    sx, sy = x.sum(), y.sum()
    sxy, sx2 = (x * y).sum(), (x * x).sum()
    denom = n * sx2 - sx * sx
    if n < 2 or math.isclose(denom, 0.0, abs_tol=1e-9):
        return TrendFit(a=None, b=None, intercept=None, points=n,
                        error=f"Insufficient data: need at least 2 distinct days, got {len(set(x.tolist()))}.")

    A = float((sx2 * sy - sx * sxy) / denom)
    b = float((n * sxy - sx * sy) / denom)
    a = math.exp(A)

    # A flat or shrinking curve never reaches the world population.
    days: Optional[float] = None
    if b > 0:
        days = (math.log(world_population) - A) / b
        if current_date is not None:
            days -= day_index(current_date)
    return TrendFit(a=a, b=b, intercept=A, points=n, days_until_saturation=days)
