from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import pandas as pd

from shiftplan.config import PlanConfig, cfg
from shiftplan.generate.requirements import RequirementGenConfig, synthetic_rows
from shiftplan.hiring import recommend
from shiftplan.input_data import DayRequirement, build_requirement
from shiftplan.output import produce_outputs
from shiftplan.planner import plan
from shiftplan.precheck import precheck_capacity
from shiftplan.progress import MinimalProgress, PlacementCallback
from shiftplan.reporting import Reporter
from shiftplan.result_types import PlanOutputs
from shiftplan.roster import build_roster

InputBuilder = Callable[[PlanConfig], DayRequirement]
Rows = pd.DataFrame | Iterable[Mapping[str, Any]]


def default_input_builder(config: PlanConfig) -> DayRequirement:
    """Build a synthetic weekday curve using the project's generator."""
    return build_requirement(synthetic_rows(RequirementGenConfig(seed=42)))


def run_planner(
    config: PlanConfig | None = None,
    rows: Rows | None = None,
    requirement: DayRequirement | None = None,
    input_builder: InputBuilder | None = None,
    reporter: Reporter | None = None,
    progress_cb: PlacementCallback | None = None,
    validate_config: bool = True,
    enable_reporting: bool = True,
    output_dir: str | Path | None = None,
) -> PlanOutputs:
    """
    Normalise, plan, recommend hires, build the roster and optionally report.

    Parameters
    ----------
    config:
        The configuration for the run. Defaults to `shiftplan.config.cfg` when omitted.
    rows:
        Raw forecast rows (mappings or a DataFrame). Ignored when `requirement`
        is supplied.
    requirement:
        A pre-built `DayRequirement`. When both this and `rows` are omitted then
        `input_builder` (or the default synthetic builder) is used.
    input_builder:
        Optional callable that accepts a `PlanConfig` and returns a `DayRequirement`.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    progress_cb:
        Optional `PlacementCallback`. Nothing is logged per placement when omitted.
    validate_config:
        Toggle to run `PlanConfig.validate()` before planning.
    enable_reporting:
        When False, skips reporter pre/post hooks even if a reporter is provided.
    output_dir:
        When set, CSV/JSON artifacts (and the coverage chart) are written there.

    Returns
    -------
    PlanOutputs
        The requirement, the plan, the hire recommendation and the roster.
    """
    cfg_obj = config or cfg

    if validate_config:
        cfg_obj.validate()

    day = requirement
    if day is None and rows is not None:
        day = build_requirement(rows)
    if day is None:
        builder = input_builder or default_input_builder
        day = builder(cfg_obj)

    limits = cfg_obj.resolve_limits()
    pt_length = cfg_obj.pt_length_for(day.is_weekend)

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(cfg_obj)

    if active_reporter is not None:
        active_reporter.pre_plan(precheck_capacity(day.required, limits, pt_length))

    result = plan(
        day.required,
        limits,
        strategy=cfg_obj.STRATEGY,
        pt_length_hours=pt_length,
        is_weekend=day.is_weekend,
        mixed_ft_ratio=cfg_obj.mixed_ft_ratio,
        progress_cb=progress_cb,
    )
    outputs = PlanOutputs(
        requirement=day,
        config=cfg_obj,
        plan=result,
        hires=recommend(result.shortage, pt_length),
        roster=build_roster(
            result.shifts_ft, result.shifts_pt, int(cfg_obj.LUNCH_MINUTES)
        ),
    )

    if active_reporter is not None:
        active_reporter.post_plan(outputs)

    if output_dir is not None:
        produce_outputs(outputs, Path(output_dir))

    return outputs


def main() -> PlanOutputs:
    """CLI entry point: plan the synthetic day with the default config."""
    return run_planner(
        config=cfg,
        validate_config=True,
        input_builder=default_input_builder,
        reporter=Reporter(cfg),
        enable_reporting=True,
        progress_cb=MinimalProgress(log_every=5),
        output_dir=Path("outputs"),
    )


if __name__ == "__main__":
    main()
