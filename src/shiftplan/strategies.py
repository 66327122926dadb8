# src/shiftplan/strategies.py
from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol

from shiftplan.result_types import ShiftType


class PlacerProto(Protocol):
    placed_ft: int
    placed_pt: int

    def place(self, shift_type: ShiftType) -> bool: ...


class Strategy(str, Enum):
    AUTO = "auto"
    FT_FIRST = "ft_first"
    PT_FIRST = "pt_first"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value: "Strategy | str") -> "Strategy":
        if isinstance(value, Strategy):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(
            f"Unknown strategy {value!r}; expected one of "
            f"{[m.value for m in cls]}"
        )


# (placer, is_weekend, mixed_ft_ratio) -> number of outer loop iterations
PlacementOrder = Callable[[PlacerProto, bool, float], int]


def _either_until_stuck(placer: PlacerProto, first: ShiftType, second: ShiftType) -> int:
    """
    Each iteration tries `first`, and only tries `second` when `first` failed.
    Stops once both fail in the same iteration.
    """
    iterations = 0
    while True:
        iterations += 1
        if not (placer.place(first) or placer.place(second)):
            return iterations


def place_auto(placer: PlacerProto, is_weekend: bool, mixed_ft_ratio: float) -> int:
    if is_weekend:
        return _either_until_stuck(placer, ShiftType.PT, ShiftType.FT)
    return _either_until_stuck(placer, ShiftType.FT, ShiftType.PT)


def place_ft_first(
    placer: PlacerProto, is_weekend: bool, mixed_ft_ratio: float
) -> int:
    return _either_until_stuck(placer, ShiftType.FT, ShiftType.PT)


def place_pt_first(
    placer: PlacerProto, is_weekend: bool, mixed_ft_ratio: float
) -> int:
    return _either_until_stuck(placer, ShiftType.PT, ShiftType.FT)


def place_mixed(placer: PlacerProto, is_weekend: bool, mixed_ft_ratio: float) -> int:
    """
    Steer the FT share of placed shifts towards `mixed_ft_ratio`. Both classes are
    attempted every iteration; the under-represented class goes first.
    """
    target = min(1.0, max(0.0, float(mixed_ft_ratio)))
    iterations = 0
    while True:
        iterations += 1
        total = placer.placed_ft + placer.placed_pt
        share = placer.placed_ft / total if total else 1.0
        if share < target:
            placed_a = placer.place(ShiftType.FT)
            placed_b = placer.place(ShiftType.PT)
        else:
            placed_a = placer.place(ShiftType.PT)
            placed_b = placer.place(ShiftType.FT)
        if not (placed_a or placed_b):
            return iterations


STRATEGY_REGISTRY: dict[Strategy, PlacementOrder] = {
    Strategy.AUTO: place_auto,
    Strategy.FT_FIRST: place_ft_first,
    Strategy.PT_FIRST: place_pt_first,
    Strategy.MIXED: place_mixed,
}


def placement_order(strategy: Strategy | str) -> PlacementOrder:
    """Return the placement-order function registered for `strategy`."""
    return STRATEGY_REGISTRY[Strategy.parse(strategy)]
