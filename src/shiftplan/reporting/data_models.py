from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoverageMetrics:
    """Key coverage metrics summarising scheduled vs required staff-hours."""

    required_hours: int
    scheduled_hours: int  # sum of coverage over the day
    covered_hours: int  # sum of min(required, coverage)
    shortage_hours: int
    excess_hours: int
    service_level: float  # covered / required (1.0 when nothing is required)
    ft_share: float  # FT shifts / all shifts (0.0 when nothing is placed)


@dataclass(frozen=True)
class HourGap:
    """Gap record for a single hour of the day."""

    hour: int
    required: int
    coverage: int
    deficit: int  # max(required - coverage, 0)
    unattainable: bool  # required > cap_ft + cap_pt
