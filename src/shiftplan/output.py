from __future__ import annotations

import json
import re
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import matplotlib.pyplot as plt
import pandas as pd

from shiftplan.result_types import (
    HOURS_PER_DAY,
    HireRecommendation,
    PlanOutputs,
    PlanResult,
    RosterEntry,
    hour_label,
    minutes_to_hhmm,
)

COVERAGE_COLUMNS = ["Hour", "Required", "Coverage", "Short", "Excess"]
SHIFT_COLUMNS = ["Type", "Start", "End", "Agents"]
HIRE_COLUMNS = ["Scenario", "Value"]
ROSTER_COLUMNS = [
    "Employee",
    "Type",
    "Start",
    "End",
    "Lunch Start",
    "Lunch End",
    "Hours",
]


# ----------------------------
# Artifact tables
# ----------------------------
def coverage_table(plan: PlanResult) -> pd.DataFrame:
    rows = [
        {
            "Hour": hour_label(h),
            "Required": plan.required[h],
            "Coverage": plan.coverage[h],
            "Short": plan.shortage[h],
            "Excess": plan.excess[h],
        }
        for h in range(HOURS_PER_DAY)
    ]
    return pd.DataFrame(rows, columns=COVERAGE_COLUMNS)


def shift_table(plan: PlanResult) -> pd.DataFrame:
    rows = [
        {
            "Type": w.shift_type.value,
            "Start": hour_label(w.start),
            "End": hour_label(w.end),
            "Agents": w.count,
        }
        for w in (*plan.shifts_ft, *plan.shifts_pt)
    ]
    return pd.DataFrame(rows, columns=SHIFT_COLUMNS)


def hire_table(hires: Optional[HireRecommendation]) -> pd.DataFrame:
    if hires is None:
        return pd.DataFrame(columns=HIRE_COLUMNS)
    pt_len = hires.pt_length_hours
    rows = [
        ("Total short staff-hours", hires.total_short),
        ("Peak hourly short", hires.peak_short),
        ("FT only (8h)", hires.min_ft8),
        (f"PT only ({pt_len}h, current)", hires.min_pt_current),
        ("PT only (4h)", hires.min_pt4),
        ("PT only (6h)", hires.min_pt6),
        ("Mixed FT (8h)", hires.mixed.ft),
        (f"Mixed PT ({hires.mixed.length_hours}h)", hires.mixed.pt),
    ]
    return pd.DataFrame(rows, columns=HIRE_COLUMNS)


def roster_table(roster: list[RosterEntry]) -> pd.DataFrame:
    rows = [
        {
            "Employee": e.label,
            "Type": e.shift_type.value,
            "Start": hour_label(e.start),
            "End": hour_label(e.end),
            "Lunch Start": minutes_to_hhmm(e.lunch_start),
            "Lunch End": minutes_to_hhmm(e.lunch_end),
            "Hours": e.hours,
        }
        for e in roster
    ]
    return pd.DataFrame(rows, columns=ROSTER_COLUMNS)


def plan_to_dict(outputs: PlanOutputs) -> dict[str, Any]:
    """JSON-ready document with the inputs, the plan and every derived artifact."""
    plan = outputs.plan
    cfg = outputs.config
    return {
        "inputs": {
            "date": outputs.requirement.label,
            "weekday": outputs.requirement.weekday,
            "is_weekend": outputs.requirement.is_weekend,
            "strategy": plan.strategy,
            "pt_length_hours": plan.pt_length_hours,
            "mixed_ft_percent": cfg.MIXED_FT_PERCENT,
            "lunch_minutes": cfg.LUNCH_MINUTES,
            "limits": asdict(plan.limits),
        },
        "coverage": coverage_table(plan).to_dict(orient="records"),
        "shifts": {
            "ft": [_window_dict(w) for w in plan.shifts_ft],
            "pt": [_window_dict(w) for w in plan.shifts_pt],
        },
        "max_concurrent": plan.max_concurrent,
        "hires": None if outputs.hires is None else _hires_dict(outputs.hires),
        "roster": roster_table(outputs.roster).to_dict(orient="records"),
    }


def _window_dict(w) -> dict[str, Any]:
    return {"start": w.start, "end": w.end, "count": w.count}


def _hires_dict(h: HireRecommendation) -> dict[str, Any]:
    out = asdict(h)
    out["mixed"] = {
        "ft": h.mixed.ft,
        "pt": h.mixed.pt,
        "lengthHours": h.mixed.length_hours,
    }
    return out


# ----------------------------
# Files
# ----------------------------
# anything but letters, digits, dot, dash and underscore
_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _file_stem(outputs: PlanOutputs) -> str:
    label = _UNSAFE_NAME_CHARS.sub("-", outputs.requirement.label).strip(".-")
    return f"schedule_{label or 'export'}"


def write_plan_json(outputs: PlanOutputs, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(plan_to_dict(outputs), indent=2))
    return path


def produce_outputs(
    outputs: PlanOutputs, out_dir: Path, enable_plot: bool = True
) -> dict[str, Path]:
    """Persist the four CSV artifacts, the JSON document and a coverage chart."""
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = _file_stem(outputs)

    tables = {
        "coverage": coverage_table(outputs.plan),
        "shifts": shift_table(outputs.plan),
        "hires": hire_table(outputs.hires),
        "roster": roster_table(outputs.roster),
    }
    written: dict[str, Path] = {}
    for name, df in tables.items():
        path = out_dir / f"{stem}_{name}.csv"
        df.to_csv(path, index=False)
        written[name] = path

    written["json"] = write_plan_json(outputs, out_dir / f"{stem}.json")

    if enable_plot:
        written["chart"] = coverage_chart(
            outputs.plan, out_dir / f"{stem}_coverage.png"
        )
    return written


def coverage_chart(plan: PlanResult, out_path: Path) -> Path:
    """Stacked FT/PT coverage bars against the required-staff line."""
    hours = list(range(HOURS_PER_DAY))
    fig, ax = plt.subplots(figsize=(9, 4), dpi=150)

    ax.bar(
        hours,
        plan.coverage_ft,
        width=0.9,
        color="#3B82F6",
        alpha=0.85,
        edgecolor="none",
        label="FT on shift",
        zorder=3,
    )
    ax.bar(
        hours,
        plan.coverage_pt,
        bottom=plan.coverage_ft,
        width=0.9,
        color="#6EE7B7",
        alpha=0.85,
        edgecolor="none",
        label="PT on shift",
        zorder=3,
    )
    ax.step(
        hours,
        plan.required,
        where="mid",
        color="black",
        linewidth=1.2,
        label="Required",
        zorder=4,
    )

    ax.set_xticks(hours)
    ax.set_xlabel("Hour of day")
    ax.set_ylabel("Agents")
    ax.set_title(
        f"Coverage vs requirement (strategy={plan.strategy}, "
        f"short={plan.total_shortage} staff-hours)",
        fontsize=11,
    )
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)
    ax.legend(
        loc="upper center",
        bbox_to_anchor=(0.5, 1.2),
        ncol=3,
        frameon=False,
    )
    ax.grid(axis="y", alpha=0.3, zorder=0)
    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=fig.dpi, bbox_inches="tight")
    plt.close(fig)
    return out_path
