from __future__ import annotations

from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from shiftplan.generate.requirements import requirement_summary
from shiftplan.output import hire_table, roster_table, shift_table
from shiftplan.precheck import PrecheckResult
from shiftplan.result_types import PlanOutputs

from .metrics import compute_coverage_metrics, compute_hour_gaps


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.01,
                    0.99,
                    "\n".join(self.lines),
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None:
        return "nan"
    try:
        if pd.isna(x):
            return "nan"
        return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"
    except (TypeError, ValueError):
        return "nan"


def print_precheck(pre: PrecheckResult) -> None:
    _log_print(
        f"Pre-check: peak required = {pre.peak_required:,} | "
        f"concurrent capacity (cap FT + cap PT) = {pre.concurrent_capacity:,} | "
        f"peak {'≤' if pre.ok_peak else '>'} capacity"
    )
    _log_print(
        f"Pre-check: required staff-hours = {pre.required_hours:,} | "
        f"shift-hour upper bound = {pre.shift_hours_upper_bound:,} | "
        f"demand {'≤' if pre.ok_hours else '>'} bound"
    )
    if pre.unattainable_hours:
        hours = ", ".join(f"{h:02d}:00" for h in pre.unattainable_hours)
        _log_print(f"⚠️ Hours that cannot be fully covered at any headcount: {hours}")


def render_text_report(
    outputs: PlanOutputs,
    *,
    num_print_examples: int = 6,
) -> None:
    plan = outputs.plan
    req = outputs.requirement
    limits = plan.limits

    _log_print(f"Plan status: {'COVERED' if plan.is_fully_covered else 'SHORTAGE'}")
    _log_print(
        f"Day: {req.label} | weekend={req.is_weekend} | strategy={plan.strategy} | "
        f"PT length={plan.pt_length_hours}h"
    )

    summary = requirement_summary(req)
    if summary["total_calls"] > 0:
        _log_print(
            f"Forecast: hours={summary['hours']} | "
            f"total calls={summary['total_calls']:,.0f} | "
            f"avg ASA={_fmt_float(summary['avg_asa'])}m | "
            f"max staff={_fmt_float(summary['max_staff'])}"
        )

    _log_print(
        f"Limits: cap FT={limits.cap_ft} | cap PT={limits.cap_pt} | "
        f"max FT shifts={limits.max_ft_shifts} | max PT shifts={limits.max_pt_shifts}"
    )
    _log_print(
        f"Placed: FT={plan.placed_ft} in {len(plan.shifts_ft)} window(s) | "
        f"PT={plan.placed_pt} in {len(plan.shifts_pt)} window(s) | "
        f"max concurrent={plan.max_concurrent} | loop iterations={plan.iterations}"
    )

    shifts = shift_table(plan)
    if shifts.empty:
        _log_print("\nShift plan: (no shifts placed)")
    else:
        _log_print("\nShift plan:")
        _log_print(shifts.to_string(index=False))

    cov = compute_coverage_metrics(plan)
    _log_print(
        f"\nSummary: required_hours={cov.required_hours:,} | "
        f"covered_hours={cov.covered_hours:,} | "
        f"scheduled_hours={cov.scheduled_hours:,} | "
        f"service level={_fmt_float(cov.service_level, nd=1, as_pct=True)}"
    )
    _log_print(
        f"Shortage staff-hours={cov.shortage_hours:,} | "
        f"excess staff-hours={cov.excess_hours:,} | "
        f"FT share of shifts={_fmt_float(cov.ft_share, nd=1, as_pct=True)}"
    )

    top_gaps, _ = compute_hour_gaps(plan, top=5)
    if not top_gaps:
        _log_print("\nPer-hour gaps: every hour meets its requirement.")
    else:
        _log_print("\nTop per-hour gaps:")
        for g in top_gaps:
            flag = " (above cap FT + cap PT)" if g.unattainable else ""
            _log_print(
                f"  {g.hour:02d}:00 required={g.required} coverage={g.coverage} "
                f"short={g.deficit}{flag}"
            )

    if outputs.hires is None:
        _log_print("\nHire recommendation: none needed.")
    else:
        _log_print("\nHire recommendation (lower bounds):")
        _log_print(hire_table(outputs.hires).to_string(index=False))
        _log_print(
            "\nDefinitions:"
            "\n- FT only: max(ceil(short hours / 8), peak hourly short)."
            "\n- PT only: ceil(short hours / PT length); no peak floor."
            "\n- These counts are not re-planned, so hourly caps may still leave some shortage."
        )

    roster = roster_table(outputs.roster)
    if roster.empty:
        _log_print("\nRoster: (empty)")
    else:
        _log_print(f"\nRoster ({len(roster)} employees, first {num_print_examples}):")
        _log_print(roster.head(num_print_examples).to_string(index=False))
