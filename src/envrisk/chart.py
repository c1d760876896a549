"""Temperature x RH grids of psychrometric quantities and risk scores.

Grids are indexed [rh, temperature] so that rows plot along the y axis.
"""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np

from .errors import DomainError
from .materials import get_profile
from .psychro import absolute_humidity, dew_point
from .risk import AXIS_ALIASES, analyze

_dew_point_grid = np.vectorize(dew_point, otypes=[float])
_absolute_humidity_grid = np.vectorize(absolute_humidity, otypes=[float])


def axis_values(start: float, stop: float, step: float) -> np.ndarray:
    if step <= 0.0:
        raise ValueError(f"step must be > 0, got {step}")
    if stop < start:
        raise ValueError("stop must be >= start")
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return start + step * np.arange(n, dtype=float)


def psychrometric_grid(temps_f: np.ndarray, rhs: np.ndarray) -> dict[str, np.ndarray]:
    temps_f = np.asarray(temps_f, dtype=float)
    rhs = np.asarray(rhs, dtype=float)
    if np.any(rhs <= 0.0):
        raise DomainError("relative humidity must be > 0 across the grid")
    T, RH = np.meshgrid(temps_f, rhs)
    return {
        "temperature": T,
        "relative_humidity": RH,
        "dew_point": _dew_point_grid(T, RH),
        "absolute_humidity": _absolute_humidity_grid(T, RH),
    }


def risk_score_grid(
    temps_f: np.ndarray, rhs: np.ndarray, material: str, axis: str
) -> np.ndarray:
    name = AXIS_ALIASES.get(axis, axis)
    if name not in AXIS_ALIASES.values():
        raise ValueError(f"unknown decay axis: {axis}")
    profile = get_profile(material)
    grid = psychrometric_grid(temps_f, rhs)
    T, RH, DP = grid["temperature"], grid["relative_humidity"], grid["dew_point"]
    scores = np.zeros(T.shape, dtype=int)
    for idx in np.ndindex(T.shape):
        res = analyze(float(T[idx]), float(RH[idx]), float(DP[idx]), profile)
        scores[idx] = res[name].score
    return scores


def write_grid_csv(
    path: Path, temps_f: np.ndarray, rhs: np.ndarray, grid: np.ndarray, value: str
) -> None:
    with Path(path).open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=["temperature_f", "relative_humidity", value])
        writer.writeheader()
        for i, rh in enumerate(rhs):
            for j, t in enumerate(temps_f):
                writer.writerow(
                    {
                        "temperature_f": float(t),
                        "relative_humidity": float(rh),
                        value: grid[i, j].item(),
                    }
                )
