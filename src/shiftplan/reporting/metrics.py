from __future__ import annotations

from dataclasses import asdict

import pandas as pd

from shiftplan.result_types import HOURS_PER_DAY, PlanResult

from .data_models import CoverageMetrics, HourGap


def compute_coverage_metrics(plan: PlanResult) -> CoverageMetrics:
    """Compute CoverageMetrics for a plan."""
    required_hours = sum(plan.required)
    covered = sum(min(r, c) for r, c in zip(plan.required, plan.coverage))
    placed = plan.placed_ft + plan.placed_pt
    return CoverageMetrics(
        required_hours=required_hours,
        scheduled_hours=sum(plan.coverage),
        covered_hours=covered,
        shortage_hours=sum(plan.shortage),
        excess_hours=sum(plan.excess),
        service_level=covered / required_hours if required_hours else 1.0,
        ft_share=plan.placed_ft / placed if placed else 0.0,
    )


def compute_hour_gaps(
    plan: PlanResult, top: int = 5
) -> tuple[list[HourGap], pd.DataFrame]:
    """
    Per-hour gap table, plus the `top` worst hours ordered by
    (unattainable, deficit, required) descending.
    """
    concurrent = plan.limits.total_cap
    gaps = [
        HourGap(
            hour=h,
            required=plan.required[h],
            coverage=plan.coverage[h],
            deficit=plan.shortage[h],
            unattainable=plan.required[h] > concurrent,
        )
        for h in range(HOURS_PER_DAY)
    ]
    df = pd.DataFrame([asdict(g) for g in gaps])
    ordered = sorted(
        (g for g in gaps if g.deficit > 0 or g.unattainable),
        key=lambda g: (g.unattainable, g.deficit, g.required),
        reverse=True,
    )
    return ordered[:top], df


def coverage_by_class(plan: PlanResult) -> pd.DataFrame:
    """Hour-indexed frame with required, FT, PT and total coverage."""
    return pd.DataFrame(
        {
            "required": plan.required,
            "ft": plan.coverage_ft,
            "pt": plan.coverage_pt,
            "coverage": plan.coverage,
        },
        index=pd.Index(range(HOURS_PER_DAY), name="hour"),
    )
