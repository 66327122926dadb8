from __future__ import annotations

from pathlib import Path
from typing import Any

from shiftplan.precheck import PrecheckResult
from shiftplan.reporting.plots import (
    show_hour_of_day_coverage,
    show_placement_progress,
)
from shiftplan.reporting.text_report import (
    ReportDocument,
    print_precheck,
    render_text_report,
    set_active_report,
)
from shiftplan.result_types import PlanOutputs


class Reporter:
    """High-level orchestrator: prints the pre-check and renders reports."""

    def __init__(
        self,
        cfg: Any,
        num_print_examples: int = 6,
        enable_plots: bool = True,
        report_path: Path = Path("outputs/report.pdf"),
    ) -> None:
        self.cfg = cfg
        self.num_print_examples = num_print_examples
        self.enable_plots = enable_plots
        self.report_path = report_path

    def pre_plan(self, precheck: PrecheckResult) -> None:
        """Print capacity bounds. Failing them is reported, never fatal."""
        print_precheck(precheck)
        if not precheck.ok:
            print("Pre-check: shortage is expected with the current limits.")

    def render_text_report(self, outputs: PlanOutputs) -> None:
        """Public entry point for callers that want text reporting only."""
        render_text_report(outputs, num_print_examples=self.num_print_examples)

    def post_plan(self, outputs: PlanOutputs) -> None:
        """Render textual report (and optional plots) after planning."""
        report_doc = ReportDocument(self.report_path)
        set_active_report(report_doc)
        try:
            self.render_text_report(outputs)
            if not self.enable_plots:
                return
            show_hour_of_day_coverage(outputs.plan, enable_plot=self.enable_plots)
            history = [
                (e.iteration, e.score, e.remaining_deficit)
                for e in outputs.plan.placements
            ]
            show_placement_progress(history=history)
        finally:
            set_active_report(None)
            report_doc.write()
