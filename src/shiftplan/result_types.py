# shiftplan/result_types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from shiftplan.config import PlanConfig
    from shiftplan.input_data import DayRequirement

HOURS_PER_DAY = 24
FT_LENGTH_HOURS = 8


class ShiftType(str, Enum):
    FT = "FT"
    PT = "PT"


@dataclass(frozen=True)
class CapacityLimits:
    """Per-hour concurrency caps and per-day shift-count ceilings for both classes."""

    cap_ft: int
    cap_pt: int
    max_ft_shifts: int
    max_pt_shifts: int

    @property
    def total_cap(self) -> int:
        return self.cap_ft + self.cap_pt

    def cap_for(self, shift_type: ShiftType) -> int:
        return self.cap_ft if shift_type is ShiftType.FT else self.cap_pt

    def max_shifts_for(self, shift_type: ShiftType) -> int:
        return (
            self.max_ft_shifts if shift_type is ShiftType.FT else self.max_pt_shifts
        )


@dataclass(frozen=True)
class ShiftWindow:
    """`count` agents working the same [start, end) window."""

    shift_type: ShiftType
    start: int
    end: int
    count: int

    @property
    def length_hours(self) -> int:
        return self.end - self.start

    def covers(self, hour: int) -> bool:
        return self.start <= hour < self.end


@dataclass(frozen=True)
class PlacementEvent:
    """One successful single-shift placement inside the greedy loop."""

    iteration: int
    shift_type: ShiftType
    start: int
    end: int
    score: int
    remaining_deficit: int


@dataclass(frozen=True)
class PlanResult:
    """Structured output of a planning run."""

    shifts_ft: tuple[ShiftWindow, ...]
    shifts_pt: tuple[ShiftWindow, ...]
    required: tuple[int, ...]
    coverage_ft: tuple[int, ...]
    coverage_pt: tuple[int, ...]
    coverage: tuple[int, ...]
    shortage: tuple[int, ...]
    excess: tuple[int, ...]
    max_concurrent: int
    strategy: str
    pt_length_hours: int
    limits: CapacityLimits
    iterations: int = 0
    placements: tuple[PlacementEvent, ...] = ()

    @property
    def placed_ft(self) -> int:
        return sum(w.count for w in self.shifts_ft)

    @property
    def placed_pt(self) -> int:
        return sum(w.count for w in self.shifts_pt)

    @property
    def total_shortage(self) -> int:
        return sum(self.shortage)

    @property
    def is_fully_covered(self) -> bool:
        return self.total_shortage == 0


@dataclass(frozen=True)
class MixedHire:
    ft: int
    pt: int
    length_hours: int


@dataclass(frozen=True)
class HireRecommendation:
    """Lower-bound hire counts derived from a residual shortage curve."""

    total_short: int
    peak_short: int
    min_ft8: int
    min_pt_current: int
    min_pt4: int
    min_pt6: int
    mixed: MixedHire
    pt_length_hours: int


@dataclass(frozen=True)
class RosterEntry:
    """One employee working one shift, lunch given in minutes from midnight."""

    employee_id: int
    shift_type: ShiftType
    start: int
    end: int
    lunch_start: int
    lunch_end: int
    hours: int

    @property
    def label(self) -> str:
        return f"{self.shift_type.value}-{self.employee_id}"


def minutes_to_hhmm(minutes: int) -> str:
    h, m = divmod(int(minutes), 60)
    return f"{h:02d}:{m:02d}"


def hour_label(hour: int) -> str:
    return f"{int(hour)}:00"


@dataclass
class PlanOutputs:
    """Everything a planning run hands to downstream consumers."""

    requirement: DayRequirement
    config: PlanConfig
    plan: PlanResult
    hires: Optional[HireRecommendation]
    roster: list[RosterEntry]

