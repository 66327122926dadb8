import math
from dataclasses import dataclass
from typing import Any, Optional

from shiftplan.result_types import CapacityLimits
from shiftplan.strategies import Strategy

PT_LENGTH_CHOICES: tuple[int, ...] = (4, 6)


@dataclass
class PlanConfig:

    ### CAPACITY ###

    # Max agents of each class on shift during any single hour
    CAP_FT: Any = 0
    CAP_PT: Any = 0

    # Max shifts (employees) of each class for the day. None/"" = same as cap
    TOTAL_FT: Any = None
    TOTAL_PT: Any = None

    ### PLACEMENT ###

    STRATEGY: Strategy | str = Strategy.AUTO

    # Target FT share of placed shifts, only read by the mixed strategy
    MIXED_FT_PERCENT: Any = 50

    # Shift lengths
    PT_LENGTH_HOURS: int = 4
    WEEKEND_PT_LENGTH_HOURS: Optional[int] = None  # None = same as weekday

    ### ROSTER ###

    LUNCH_MINUTES: Any = 30

    def __post_init__(self) -> None:
        self.CAP_FT = coerce_count(self.CAP_FT)
        self.CAP_PT = coerce_count(self.CAP_PT)
        self.TOTAL_FT = coerce_optional_count(self.TOTAL_FT)
        self.TOTAL_PT = coerce_optional_count(self.TOTAL_PT)
        self.MIXED_FT_PERCENT = _coerce_percent(self.MIXED_FT_PERCENT)
        self.LUNCH_MINUTES = coerce_count(self.LUNCH_MINUTES, default=30)
        self.PT_LENGTH_HOURS = coerce_count(self.PT_LENGTH_HOURS, default=4)
        self.WEEKEND_PT_LENGTH_HOURS = coerce_optional_count(
            self.WEEKEND_PT_LENGTH_HOURS
        )
        self.STRATEGY = Strategy.parse(self.STRATEGY)

    def validate(self) -> None:
        """
        Validate the PlanConfig object has sensible values before planning.
        """
        if self.PT_LENGTH_HOURS not in PT_LENGTH_CHOICES:
            raise ValueError(f"PT_LENGTH_HOURS must be one of {PT_LENGTH_CHOICES}.")
        if (
            self.WEEKEND_PT_LENGTH_HOURS is not None
            and self.WEEKEND_PT_LENGTH_HOURS not in PT_LENGTH_CHOICES
        ):
            raise ValueError(
                f"WEEKEND_PT_LENGTH_HOURS must be None or one of {PT_LENGTH_CHOICES}."
            )
        if not (0.0 <= self.MIXED_FT_PERCENT <= 100.0):
            raise ValueError("MIXED_FT_PERCENT must be within [0, 100].")
        Strategy.parse(self.STRATEGY)

    def resolve_limits(self) -> CapacityLimits:
        """
        Totals left blank fall back to the caps, so the plan never implies more
        employees than can be on shift concurrently.
        """
        cap_ft, cap_pt = int(self.CAP_FT), int(self.CAP_PT)
        return CapacityLimits(
            cap_ft=cap_ft,
            cap_pt=cap_pt,
            max_ft_shifts=cap_ft if self.TOTAL_FT is None else int(self.TOTAL_FT),
            max_pt_shifts=cap_pt if self.TOTAL_PT is None else int(self.TOTAL_PT),
        )

    def pt_length_for(self, is_weekend: bool) -> int:
        if is_weekend and self.WEEKEND_PT_LENGTH_HOURS is not None:
            return int(self.WEEKEND_PT_LENGTH_HOURS)
        return int(self.PT_LENGTH_HOURS)

    @property
    def mixed_ft_ratio(self) -> float:
        return min(1.0, max(0.0, float(self.MIXED_FT_PERCENT) / 100.0))


def coerce_count(value: Any, default: int = 0) -> int:
    """
    Turn user input into a non-negative int.
    - None / "" => default
    - non-numeric, NaN or negative => 0
    - fractional => truncated
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(num) or num < 0:
        return 0
    return int(num)


def coerce_optional_count(value: Any) -> Optional[int]:
    """Like coerce_count, but keeps blank values as None (meaning "not set")."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return coerce_count(value)


def _coerce_percent(value: Any) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 50.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 50.0
    if math.isnan(num):
        return 50.0
    return min(100.0, max(0.0, num))


cfg = PlanConfig(
    CAP_FT=12,
    CAP_PT=6,
    TOTAL_FT=None,
    TOTAL_PT=None,
    STRATEGY=Strategy.AUTO,
    MIXED_FT_PERCENT=60,
    PT_LENGTH_HOURS=4,
    WEEKEND_PT_LENGTH_HOURS=6,
    LUNCH_MINUTES=30,
)
