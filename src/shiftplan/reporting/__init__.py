from __future__ import annotations

from .data_models import CoverageMetrics, HourGap
from .reporter import Reporter

__all__ = [
    "Reporter",
    "CoverageMetrics",
    "HourGap",
]
