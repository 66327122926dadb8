from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from shiftplan.result_types import PlanResult

from .metrics import coverage_by_class
from .text_report import get_active_report


def _save_and_show(fig: plt.Figure, filename: str) -> None:
    """Persist the plot under outputs/ and show it."""
    out_dir = Path("outputs")
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_hour_of_day_coverage(plan: PlanResult, enable_plot: bool = True) -> None:
    """Render stacked FT/PT coverage by hour-of-day against the requirement."""
    if not enable_plot:
        return

    frame = coverage_by_class(plan)
    hours = list(frame.index)

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Coverage by hour of day", pad=35)
    ax.bar(
        hours,
        frame["ft"],
        label="FT",
        color="#3B82F6",
        alpha=0.8,
        width=0.9,
        edgecolor="none",
    )
    ax.bar(
        hours,
        frame["pt"],
        bottom=frame["ft"],
        label="PT",
        color="#6EE7B7",
        alpha=0.8,
        width=0.9,
        edgecolor="none",
    )
    ax.plot(
        hours,
        frame["required"],
        linewidth=1,
        color="black",
        label="Required",
    )
    short = [h for h in hours if plan.shortage[h] > 0]
    if short:
        ax.scatter(
            short,
            [plan.required[h] for h in short],
            color="tab:red",
            s=12,
            zorder=4,
            label="Short",
        )

    max_y = max(float(frame["coverage"].max()), float(frame["required"].max()), 1.0)
    ax.set_ylim(0, max_y * 1.05)
    ax.set_xmargin(0.0)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.set_xlabel("Hour of day")
    ax.set_ylabel("Agents on shift")
    ax.set_xticks(hours)
    ax.legend(
        ncol=4,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        borderaxespad=0.3,
    )
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "hour_of_day_coverage.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_placement_progress(history: Sequence[tuple[int, int, int]]) -> None:
    """
    Plot the score of each placed shift and the shortage left behind it.

    history entries are (iteration, score, remaining_deficit).
    """
    if not history:
        return
    idx = [pt[0] for pt in history]
    scores = [pt[1] for pt in history]
    remaining = [pt[2] for pt in history]

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Greedy placement history", pad=35)
    score_color = "tab:blue"
    left_color = "tab:red"

    ax.plot(idx, scores, label="Shift score", color=score_color, linewidth=1.5)
    ax.set_xlabel("Placement # (in placement order)")
    ax.set_ylabel("Staff-hours absorbed", color=score_color)
    ax.tick_params(axis="y", colors=score_color)
    ax.set_xlim(*_expand_limits(idx, axis_padding=0.01))
    ax.set_ylim(*_expand_limits(scores))
    ax.spines["top"].set_visible(False)

    ax_left = ax.twinx()
    ax_left.plot(
        idx,
        remaining,
        label="Shortage left",
        color=left_color,
        linestyle="--",
        linewidth=1.25,
    )
    ax_left.set_ylabel(f"Shortage left. Final={remaining[-1]}", color=left_color)
    ax_left.tick_params(axis="y", colors=left_color)
    ax_left.set_ylim(*_expand_limits(remaining))
    ax_left.spines["top"].set_visible(False)
    ax.xaxis.set_major_locator(plt.MaxNLocator(integer=True))

    lines, labels = ax.get_legend_handles_labels()
    lines2, labels2 = ax_left.get_legend_handles_labels()
    ax.legend(
        lines + lines2,
        labels + labels2,
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        ncol=2,
        borderaxespad=0.3,
    )
    ax.grid(alpha=0.3)
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "placement_history.png")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def _expand_limits(
    values: Sequence[float], axis_padding: float = 0.05
) -> tuple[float, float]:
    lo = min(values)
    hi = max(values)
    if lo == hi:
        delta = max(abs(lo), 1.0) * max(axis_padding, 0.05)
        return lo - delta, hi + delta
    span = hi - lo
    pad = span * axis_padding
    return lo - pad, hi + pad
