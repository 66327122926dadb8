# requirement_generation.py
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np

from shiftplan.input_data import (
    DayRequirement,
    build_requirement,
    requirement_from_payload,
)
from shiftplan.result_types import HOURS_PER_DAY

DEFAULT_FORECAST_JSON = Path(__file__).resolve().parents[2] / "example_forecast.json"


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class RequirementGenConfig:
    """
    Configuration for generation of a synthetic contact-centre day, emitted in the
    same row shape the forecasting service returns.
    """

    day: date = date(2025, 10, 13)  # Monday

    # Opening hours; calls outside them are near zero
    open_hour: int = 7
    close_hour: int = 22

    # Two-humped arrival curve: (peak hour, peak calls per hour)
    peaks: Sequence[tuple[float, float]] = ((10.5, 220.0), (15.0, 180.0))
    peak_width_hours: float = 2.5
    base_calls: float = 40.0

    # Workload -> agents
    aht_seconds: float = 300.0
    occupancy: float = 0.85

    # Multiplicative noise on calls (std dev as a fraction)
    noise: float = 0.08

    # Weekend volumes are scaled down
    weekend_factor: float = 0.6

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if not (0 <= self.open_hour < self.close_hour <= HOURS_PER_DAY):
            raise ValueError("Require 0 <= open_hour < close_hour <= 24.")
        if self.peak_width_hours <= 0:
            raise ValueError("peak_width_hours must be > 0.")
        if self.aht_seconds <= 0:
            raise ValueError("aht_seconds must be > 0.")
        if not (0.0 < self.occupancy <= 1.0):
            raise ValueError("occupancy must be in (0, 1].")
        if self.noise < 0 or self.base_calls < 0:
            raise ValueError("noise and base_calls must be non-negative.")
        if not (0.0 <= self.weekend_factor <= 1.0):
            raise ValueError("weekend_factor must be in [0,1].")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")

    @property
    def is_weekend(self) -> bool:
        return self.day.weekday() >= 5


def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


# ----------------------------
# Core API
# ----------------------------
def synthetic_calls(cfg: RequirementGenConfig) -> np.ndarray:
    """Expected calls per hour (length 24) for the configured day."""
    cfg.validate()
    g = _rng(cfg.seed)
    hours = np.arange(HOURS_PER_DAY, dtype=float)

    curve = np.full(HOURS_PER_DAY, cfg.base_calls, dtype=float)
    for centre, height in cfg.peaks:
        curve += height * np.exp(-0.5 * ((hours - centre) / cfg.peak_width_hours) ** 2)

    open_mask = (hours >= cfg.open_hour) & (hours < cfg.close_hour)
    curve = np.where(open_mask, curve, 0.0)

    if cfg.noise > 0:
        curve = curve * g.normal(1.0, cfg.noise, size=HOURS_PER_DAY)
    if cfg.is_weekend:
        curve = curve * cfg.weekend_factor
    return np.clip(curve, 0.0, None)


def synthetic_rows(cfg: RequirementGenConfig) -> list[dict[str, Any]]:
    """
    Rows shaped like the forecasting service output:
    DateLabel, Hour, Is_Weekend, CALLS, ASA, Staff.
    """
    calls = synthetic_calls(cfg)
    g = _rng(None if cfg.seed is None else cfg.seed + 1)
    staff = calls * cfg.aht_seconds / 3600.0 / cfg.occupancy
    asa = np.where(calls > 0, g.uniform(0.5, 4.0, size=HOURS_PER_DAY), 0.0)
    weekend = int(cfg.is_weekend)
    label = cfg.day.isoformat()

    return [
        {
            "DateLabel": label,
            "Hour": h,
            "Is_Weekend": weekend,
            "CALLS": round(float(calls[h]), 2),
            "ASA": round(float(asa[h]), 2),
            "Staff": round(float(staff[h]), 2),
        }
        for h in range(HOURS_PER_DAY)
    ]


def synthetic_requirement(cfg: RequirementGenConfig) -> DayRequirement:
    return build_requirement(
        synthetic_rows(cfg),
        date=cfg.day.isoformat(),
        weekday=cfg.day.strftime("%A"),
    )


def synthetic_payload(cfg: RequirementGenConfig) -> dict[str, Any]:
    """A full forecast service response around the synthetic rows."""
    return {
        "inputs": {
            "Date": cfg.day.isoformat(),
            "Weekday": cfg.day.strftime("%A"),
        },
        "data": synthetic_rows(cfg),
    }


def requirement_from_json(path: str | Path | None = None) -> DayRequirement:
    """
    Load one planning day from a JSON file on disk.

    If `path` is omitted, the loader reads from `src/example_forecast.json`. Files
    may contain either the forecast service response (an object with a `data`
    array) or a bare list of hourly rows.
    """

    file_path = Path(path) if path is not None else DEFAULT_FORECAST_JSON
    file_path = file_path.expanduser()

    if file_path.suffix.lower() != ".json":
        raise ValueError("requirement_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Forecast JSON file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc

    if isinstance(data, dict):
        return requirement_from_payload(data)
    if isinstance(data, list):
        return build_requirement(data)
    raise TypeError("JSON file must contain a forecast object or a list of rows.")


def requirement_summary(req: DayRequirement) -> dict:
    """Headline numbers for a forecast day."""
    calls = [rec.calls for rec in req.hours if rec.calls is not None]
    asa = [rec.asa for rec in req.hours if rec.asa is not None]
    return {
        "date": req.label,
        "is_weekend": req.is_weekend,
        "hours": len(req.hours),
        "total_calls": float(sum(calls)) if calls else 0.0,
        "avg_asa": round(float(np.mean(asa)), 2) if asa else 0.0,
        "max_staff": max((rec.staff for rec in req.hours), default=0.0),
        "required_hours": sum(req.required),
        "peak_required": max(req.required),
    }


def parse_day(value: str) -> date:
    try:
        return datetime.fromisoformat(value).date()
    except ValueError as exc:
        raise ValueError(f"Invalid date string '{value}'") from exc
