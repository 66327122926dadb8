# shiftplan/precheck.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from shiftplan.result_types import FT_LENGTH_HOURS, CapacityLimits


@dataclass(frozen=True)
class PrecheckResult:
    """Cheap capacity bounds computed before any shift is placed."""

    peak_required: int
    concurrent_capacity: int
    required_hours: int
    shift_hours_upper_bound: int
    unattainable_hours: tuple[int, ...] = ()

    @property
    def ok_peak(self) -> bool:
        return self.peak_required <= self.concurrent_capacity

    @property
    def ok_hours(self) -> bool:
        return self.required_hours <= self.shift_hours_upper_bound

    @property
    def ok(self) -> bool:
        return self.ok_peak and self.ok_hours


def _effective_shifts(cap: int, max_shifts: int) -> int:
    """Shifts of a class that can ever be placed: zero when its cap is zero."""
    return max(0, max_shifts) if cap > 0 else 0


def precheck_capacity(
    required: Sequence[int], limits: CapacityLimits, pt_length_hours: int
) -> PrecheckResult:
    """
    Loose *upper bounds* on what the planner can cover:

      concurrent_capacity   = cap_ft + cap_pt            (per hour)
      shift_hours_upper_bound = max_ft * 8 + max_pt * L  (whole day)

    Hours whose requirement exceeds concurrent_capacity can never be covered.
    Passing the pre-check does not mean the planner will reach zero shortage.
    """
    req = np.clip(np.asarray(list(required), dtype=int), 0, None)
    concurrent = max(0, limits.cap_ft) + max(0, limits.cap_pt)
    upper = (
        _effective_shifts(limits.cap_ft, limits.max_ft_shifts) * FT_LENGTH_HOURS
        + _effective_shifts(limits.cap_pt, limits.max_pt_shifts) * int(pt_length_hours)
    )
    unattainable = tuple(int(h) for h in np.flatnonzero(req > concurrent))
    return PrecheckResult(
        peak_required=int(req.max()) if req.size else 0,
        concurrent_capacity=concurrent,
        required_hours=int(req.sum()),
        shift_hours_upper_bound=int(upper),
        unattainable_hours=unattainable,
    )
