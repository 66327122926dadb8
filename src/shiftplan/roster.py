from __future__ import annotations

import math
from typing import Iterable

from shiftplan.result_types import RosterEntry, ShiftType, ShiftWindow

LUNCH_GRID_MINUTES = 30


def round_to_grid(minutes: float, grid: int = LUNCH_GRID_MINUTES) -> int:
    """Nearest multiple of `grid`, halves rounded up."""
    return int(math.floor(minutes / grid + 0.5)) * grid


def lunch_window(start: int, end: int, lunch_minutes: int) -> tuple[int, int]:
    """
    Mid-shift lunch snapped to the 30-minute grid and kept inside the shift.
    Returns (lunch_start, lunch_end) in minutes from midnight.
    """
    lunch = max(0, int(lunch_minutes))
    shift_start, shift_end = start * 60, end * 60
    midpoint = shift_start + (shift_end - shift_start) / 2
    lunch_start = round_to_grid(midpoint - lunch / 2)
    lunch_start = min(max(lunch_start, shift_start), shift_end)
    lunch_end = min(max(lunch_start + lunch, shift_start), shift_end)
    return lunch_start, lunch_end


def build_roster(
    shifts_ft: Iterable[ShiftWindow],
    shifts_pt: Iterable[ShiftWindow],
    lunch_minutes: int = 30,
) -> list[RosterEntry]:
    """
    Unroll merged windows into one entry per employee, FT first then PT.
    Employee ids run 1, 2, ... separately for each class.
    """
    roster: list[RosterEntry] = []
    for shift_type, windows in ((ShiftType.FT, shifts_ft), (ShiftType.PT, shifts_pt)):
        next_id = 1
        for window in windows:
            lunch_start, lunch_end = lunch_window(
                window.start, window.end, lunch_minutes
            )
            for _ in range(window.count):
                roster.append(
                    RosterEntry(
                        employee_id=next_id,
                        shift_type=shift_type,
                        start=window.start,
                        end=window.end,
                        lunch_start=lunch_start,
                        lunch_end=lunch_end,
                        hours=window.end - window.start,
                    )
                )
                next_id += 1
    return roster
