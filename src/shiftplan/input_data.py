from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from shiftplan.result_types import HOURS_PER_DAY

HOUR_ALIASES = ("hour", "hour_of_day", "h")
STAFF_ALIASES = ("staff", "required", "required_staff", "agents")
WEEKEND_ALIASES = ("is_weekend", "weekend")
CALLS_ALIASES = ("calls",)
ASA_ALIASES = ("asa",)
DATE_ALIASES = ("datelabel", "date_label", "date")

WEEKEND_DAYS = {"saturday", "sunday", "sat", "sun"}


@dataclass(frozen=True)
class HourlyRequirement:
    """One hour of the forecast: fractional staff plus optional call context."""

    hour: int
    staff: float
    is_weekend: bool = False
    calls: Optional[float] = None
    asa: Optional[float] = None
    date_label: Optional[str] = None

    @property
    def required(self) -> int:
        return normalize_staff(self.staff)


@dataclass(frozen=True)
class DayRequirement:
    """Exactly 24 contiguous hourly records for the day being planned."""

    hours: tuple[HourlyRequirement, ...]
    date: Optional[str] = None
    weekday: Optional[str] = None
    # explicit weekend flag; None = derive from row flags and weekday
    weekend_override: Optional[bool] = None
    meta: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if len(self.hours) != HOURS_PER_DAY:
            raise ValueError(
                f"DayRequirement needs {HOURS_PER_DAY} hourly records; got {len(self.hours)}."
            )
        for idx, rec in enumerate(self.hours):
            if rec.hour != idx:
                raise ValueError(
                    f"Hourly records must be ordered 0..{HOURS_PER_DAY - 1}; "
                    f"position {idx} holds hour {rec.hour}."
                )

    @property
    def required(self) -> list[int]:
        return [rec.required for rec in self.hours]

    @property
    def is_weekend(self) -> bool:
        if self.weekend_override is not None:
            return self.weekend_override
        if any(rec.is_weekend for rec in self.hours):
            return True
        return bool(self.weekday) and str(self.weekday).strip().lower() in WEEKEND_DAYS

    @property
    def label(self) -> str:
        """Name used for exported files: the date, else the first row's label."""
        if self.date:
            return str(self.date)
        for rec in self.hours:
            if rec.date_label:
                return rec.date_label
        return "export"


def normalize_staff(value: Any) -> int:
    """Fractional staffing figure -> integer requirement (ceil, floored at 0)."""
    if value is None:
        return 0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(num) or num <= 0:
        return 0
    return int(math.ceil(num))


def _parse_hour(value: Any) -> int:
    if isinstance(value, str):
        text = value.strip()
        head = text.split(":", 1)[0]
        try:
            return int(head)
        except ValueError as exc:
            raise ValueError(f"Invalid hour value {value!r}") from exc
    try:
        num = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid hour value {value!r}") from exc
    if not math.isfinite(num) or num != int(num):
        raise ValueError(f"Invalid hour value {value!r}")
    return int(num)


def _parse_flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    try:
        if pd.isna(value):
            return False
    except (TypeError, ValueError):
        pass
    return bool(value)


def _optional_float(value: Any) -> Optional[float]:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def _pick(columns: Mapping[str, Any], aliases: Iterable[str]) -> Any:
    return next((columns[c] for c in aliases if c in columns), None)


def requirement_frame(rows: pd.DataFrame | Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """
    Map forecast rows onto canonical columns:
    hour, staff, is_weekend, calls, asa, date_label.
    Column names are matched case-insensitively against a few aliases.
    """
    df = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    canonical = ["hour", "staff", "is_weekend", "calls", "asa", "date_label"]
    if df.empty:
        return pd.DataFrame(columns=canonical)

    sc = {str(c).strip().lower(): c for c in df.columns}
    hour_col = _pick(sc, HOUR_ALIASES)
    if hour_col is None:
        raise ValueError(
            f"Forecast rows need an hour column (one of {HOUR_ALIASES}); "
            f"got {list(df.columns)}"
        )

    out = pd.DataFrame({"hour": [_parse_hour(v) for v in df[hour_col]]})

    staff_col = _pick(sc, STAFF_ALIASES)
    if staff_col is None:
        out["staff"] = 0.0
    else:
        staff = pd.to_numeric(df[staff_col], errors="coerce").fillna(0.0)
        out["staff"] = staff.clip(lower=0.0).to_numpy(dtype=float)

    weekend_col = _pick(sc, WEEKEND_ALIASES)
    out["is_weekend"] = (
        [_parse_flag(v) for v in df[weekend_col]] if weekend_col is not None else False
    )

    for name, aliases in (("calls", CALLS_ALIASES), ("asa", ASA_ALIASES)):
        col = _pick(sc, aliases)
        out[name] = [_optional_float(v) for v in df[col]] if col is not None else None

    date_col = _pick(sc, DATE_ALIASES)
    out["date_label"] = (
        [None if pd.isna(v) else str(v) for v in df[date_col]]
        if date_col is not None
        else None
    )
    return out[canonical]


def build_requirement(
    rows: pd.DataFrame | Iterable[Mapping[str, Any]],
    *,
    date: Optional[str] = None,
    weekday: Optional[str] = None,
    is_weekend: Optional[bool] = None,
) -> DayRequirement:
    """
    Build the 24-hour DayRequirement from forecast rows.

    Hours missing from `rows` get zero staff. Duplicate hours or hours outside
    0..23 raise ValueError. `is_weekend` overrides both the per-row flags and `weekday` when given.
    """
    frame = requirement_frame(rows)

    bad = frame[(frame["hour"] < 0) | (frame["hour"] >= HOURS_PER_DAY)]
    if not bad.empty:
        raise ValueError(
            f"Hour values must be within [0, {HOURS_PER_DAY - 1}]; "
            f"got {sorted(bad['hour'].tolist())}"
        )
    dups = frame[frame["hour"].duplicated()]
    if not dups.empty:
        raise ValueError(f"Duplicate hour rows: {sorted(set(dups['hour'].tolist()))}")

    day_weekend = (
        bool(is_weekend)
        if is_weekend is not None
        else bool(frame["is_weekend"].astype(bool).any())
    )
    by_hour = {int(r["hour"]): r for r in frame.to_dict(orient="records")}

    records: list[HourlyRequirement] = []
    for h in range(HOURS_PER_DAY):
        r = by_hour.get(h)
        if r is None:
            records.append(HourlyRequirement(hour=h, staff=0.0, is_weekend=day_weekend))
            continue
        records.append(
            HourlyRequirement(
                hour=h,
                staff=float(r["staff"]),
                is_weekend=day_weekend,
                calls=_optional_float(r["calls"]),
                asa=_optional_float(r["asa"]),
                date_label=r["date_label"],
            )
        )
    return DayRequirement(
        hours=tuple(records),
        date=date,
        weekday=weekday,
        weekend_override=None if is_weekend is None else bool(is_weekend),
    )


def requirement_from_payload(payload: Mapping[str, Any]) -> DayRequirement:
    """
    Accept the forecast service response: {"inputs": {...}, "data": [rows]}.
    A bare list of rows under "data" or "hours" is enough; "inputs" is optional.
    """
    if not isinstance(payload, Mapping):
        raise TypeError("Forecast payload must be a mapping with a 'data' array.")
    rows = payload.get("data")
    if rows is None:
        rows = payload.get("hours")
    if rows is None:
        raise ValueError("Forecast payload must contain a 'data' (or 'hours') array.")
    if isinstance(rows, (str, bytes, bytearray)) or not isinstance(rows, Iterable):
        raise TypeError("Forecast payload 'data' must be a list of row objects.")

    inputs = payload.get("inputs") or {}
    if not isinstance(inputs, Mapping):
        inputs = {}
    date = inputs.get("Date") or inputs.get("date")
    weekday = inputs.get("Weekday") or inputs.get("weekday")

    req = build_requirement(
        rows,
        date=str(date) if date else None,
        weekday=str(weekday) if weekday else None,
    )
    meta = {k: v for k, v in payload.items() if k not in ("data", "hours")}
    return DayRequirement(
        hours=req.hours,
        date=req.date,
        weekday=req.weekday,
        weekend_override=req.weekend_override,
        meta=meta,
    )
