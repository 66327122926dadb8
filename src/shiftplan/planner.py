# src/shiftplan/planner.py
from __future__ import annotations

from typing import Optional, Sequence

from shiftplan.config import coerce_count
from shiftplan.progress import PlacementCallback
from shiftplan.result_types import (
    FT_LENGTH_HOURS,
    HOURS_PER_DAY,
    CapacityLimits,
    PlacementEvent,
    PlanResult,
    ShiftType,
    ShiftWindow,
)
from shiftplan.strategies import Strategy, placement_order

# (shift_type, start, end)
WindowKey = tuple[ShiftType, int, int]


class PlannerState:
    """
    Working arrays for one planning run. Strategies drive it through `place()`;
    nothing here outlives the call to `plan()`.
    """

    def __init__(
        self,
        required: Sequence[int],
        limits: CapacityLimits,
        pt_length_hours: int,
        progress_cb: Optional[PlacementCallback] = None,
    ) -> None:
        self.required: list[int] = [coerce_count(v) for v in required]
        self.limits = limits
        self.lengths: dict[ShiftType, int] = {
            ShiftType.FT: FT_LENGTH_HOURS,
            ShiftType.PT: int(pt_length_hours),
        }
        self.progress_cb = progress_cb

        self.deficit: list[int] = list(self.required)
        self.cov: dict[ShiftType, list[int]] = {
            ShiftType.FT: [0] * HOURS_PER_DAY,
            ShiftType.PT: [0] * HOURS_PER_DAY,
        }
        self.placed: dict[ShiftType, int] = {ShiftType.FT: 0, ShiftType.PT: 0}

        # merged windows, insertion order kept until the final sort
        self.windows: dict[WindowKey, int] = {}
        self.events: list[PlacementEvent] = []

    # ----- counters read by the strategies -----
    @property
    def placed_ft(self) -> int:
        return self.placed[ShiftType.FT]

    @property
    def placed_pt(self) -> int:
        return self.placed[ShiftType.PT]

    def combined(self, hour: int) -> int:
        return self.cov[ShiftType.FT][hour] + self.cov[ShiftType.PT][hour]

    # ----- feasibility / scoring -----
    def start_hours(self, shift_type: ShiftType) -> range:
        return range(0, HOURS_PER_DAY - self.lengths[shift_type] + 1)

    def is_feasible(self, shift_type: ShiftType, start: int) -> bool:
        if self.placed[shift_type] >= self.limits.max_shifts_for(shift_type):
            return False
        cap = self.limits.cap_for(shift_type)
        total_cap = self.limits.total_cap
        cov = self.cov[shift_type]
        for h in range(start, start + self.lengths[shift_type]):
            if cov[h] >= cap or self.combined(h) >= total_cap:
                return False
        return True

    def score(self, shift_type: ShiftType, start: int) -> int:
        cap = self.limits.cap_for(shift_type)
        total_cap = self.limits.total_cap
        cov = self.cov[shift_type]
        total = 0
        for h in range(start, start + self.lengths[shift_type]):
            room = min(total_cap - self.combined(h), cap - cov[h])
            total += min(self.deficit[h], room)
        return total

    def best_start(self, shift_type: ShiftType) -> tuple[Optional[int], int]:
        """Highest-scoring feasible start; ties go to the earliest hour."""
        best_start: Optional[int] = None
        best_score = 0
        for start in self.start_hours(shift_type):
            if not self.is_feasible(shift_type, start):
                continue
            sc = self.score(shift_type, start)
            if sc > best_score:
                best_start, best_score = start, sc
        return best_start, best_score

    # ----- the one primitive every strategy shares -----
    def place(self, shift_type: ShiftType) -> bool:
        start, sc = self.best_start(shift_type)
        if start is None:
            return False

        end = start + self.lengths[shift_type]
        key = (shift_type, start, end)
        self.windows[key] = self.windows.get(key, 0) + 1

        cov = self.cov[shift_type]
        for h in range(start, end):
            cov[h] += 1
            self.deficit[h] = max(0, self.deficit[h] - 1)
        self.placed[shift_type] += 1

        event = PlacementEvent(
            iteration=len(self.events) + 1,
            shift_type=shift_type,
            start=start,
            end=end,
            score=sc,
            remaining_deficit=sum(self.deficit),
        )
        self.events.append(event)
        if self.progress_cb is not None:
            self.progress_cb.on_placement(event)
        return True

    def merged_windows(self, shift_type: ShiftType) -> tuple[ShiftWindow, ...]:
        keys = sorted(
            (k for k in self.windows if k[0] is shift_type),
            key=lambda k: (k[1], k[2]),
        )
        return tuple(
            ShiftWindow(shift_type=t, start=s, end=e, count=self.windows[(t, s, e)])
            for t, s, e in keys
        )


def plan(
    required: Sequence[int],
    limits: CapacityLimits,
    strategy: Strategy | str = Strategy.AUTO,
    pt_length_hours: int = 4,
    is_weekend: bool = False,
    mixed_ft_ratio: float = 0.5,
    progress_cb: Optional[PlacementCallback] = None,
) -> PlanResult:
    """
    Greedily place FT and PT shift windows over a 24-hour requirement curve.

    Parameters
    ----------
    required:
        24 non-negative integers, one per hour of day. Fractional values are
        truncated; negative, missing or non-numeric values count as 0.
    limits:
        Per-hour caps and per-day shift-count ceilings for both classes.
    strategy:
        Order in which the two classes get to place shifts.
    pt_length_hours:
        Length of part-time windows; full-time windows are always 8 hours.
    is_weekend:
        Only used by the `auto` strategy (PT first on weekends).
    mixed_ft_ratio:
        Target FT share (0..1) for the `mixed` strategy.
    progress_cb:
        Optional callback told about every successful placement.

    Returns
    -------
    PlanResult
        Merged windows plus per-hour coverage, shortage and excess. The same
        inputs always give the same result.
    """
    if len(required) != HOURS_PER_DAY:
        raise ValueError(
            f"required must have {HOURS_PER_DAY} hourly values; got {len(required)}."
        )
    if not (1 <= int(pt_length_hours) <= HOURS_PER_DAY):
        raise ValueError(f"pt_length_hours must be within [1, {HOURS_PER_DAY}].")

    strategy_obj = Strategy.parse(strategy)
    state = PlannerState(required, limits, pt_length_hours, progress_cb=progress_cb)
    iterations = placement_order(strategy_obj)(state, bool(is_weekend), mixed_ft_ratio)

    cov_ft = tuple(state.cov[ShiftType.FT])
    cov_pt = tuple(state.cov[ShiftType.PT])
    coverage = tuple(f + p for f, p in zip(cov_ft, cov_pt))
    req = tuple(state.required)

    return PlanResult(
        shifts_ft=state.merged_windows(ShiftType.FT),
        shifts_pt=state.merged_windows(ShiftType.PT),
        required=req,
        coverage_ft=cov_ft,
        coverage_pt=cov_pt,
        coverage=coverage,
        shortage=tuple(max(0, r - c) for r, c in zip(req, coverage)),
        excess=tuple(max(0, c - r) for r, c in zip(req, coverage)),
        max_concurrent=max(coverage) if coverage else 0,
        strategy=strategy_obj.value,
        pt_length_hours=int(pt_length_hours),
        limits=limits,
        iterations=iterations,
        placements=tuple(state.events),
    )
