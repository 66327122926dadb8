from __future__ import annotations

import math
from typing import Optional, Sequence

from shiftplan.result_types import FT_LENGTH_HOURS, HireRecommendation, MixedHire


def recommend(
    shortage: Sequence[int], pt_length_hours: int
) -> Optional[HireRecommendation]:
    """
    Lower-bound hire counts that would absorb the residual shortage.

    FT-only takes the larger of the total-hours bound and the worst hour's
    concurrent shortfall. PT-only counts are total-hours bounds with no peak
    floor. The mixed example keeps enough FT for the peak and fills the rest
    with PT shifts of the active length.

    These are not re-run through the planner, so caps can still leave some
    shortage after hiring this many. Returns None when nothing is short.
    """
    short = [max(0, int(v)) for v in shortage]
    total_short = sum(short)
    if total_short <= 0:
        return None
    peak_short = max(short)
    pt_len = max(1, int(pt_length_hours))

    mixed_ft = max(peak_short, total_short // FT_LENGTH_HOURS)
    mixed_pt = math.ceil(max(0, total_short - mixed_ft * FT_LENGTH_HOURS) / pt_len)

    return HireRecommendation(
        total_short=total_short,
        peak_short=peak_short,
        min_ft8=max(math.ceil(total_short / FT_LENGTH_HOURS), peak_short),
        min_pt_current=math.ceil(total_short / pt_len),
        min_pt4=math.ceil(total_short / 4),
        min_pt6=math.ceil(total_short / 6),
        mixed=MixedHire(ft=mixed_ft, pt=mixed_pt, length_hours=pt_len),
        pt_length_hours=pt_len,
    )
