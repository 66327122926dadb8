from __future__ import annotations

import matplotlib
import pytest

matplotlib.use("Agg", force=True)
from shiftplan import PlanConfig, run_planner
from shiftplan.input_data import build_requirement
from shiftplan.result_types import ShiftType, ShiftWindow


def weekday_rows():
    return [
        {"Hour": h, "Staff": 4.3 if 9 <= h < 17 else 0, "Is_Weekend": 0}
        for h in range(24)
    ]


def test_run_planner_covers_a_flat_day():
    conf = PlanConfig(CAP_FT=5, CAP_PT=3, STRATEGY="ft_first", PT_LENGTH_HOURS=4)
    out = run_planner(conf, rows=weekday_rows(), enable_reporting=False)

    assert out.plan.shifts_ft == (ShiftWindow(ShiftType.FT, 9, 17, 5),)
    assert out.plan.shifts_pt == ()
    assert out.plan.is_fully_covered
    assert out.hires is None
    assert len(out.roster) == 5
    assert out.roster[0].label == "FT-1"
    assert out.config is conf


def test_run_planner_recommends_hires_when_short():
    conf = PlanConfig(CAP_FT=2, CAP_PT=0, TOTAL_FT=1, STRATEGY="ft_first")
    out = run_planner(conf, rows=weekday_rows(), enable_reporting=False)

    assert out.plan.total_shortage > 0
    assert out.hires is not None
    assert out.hires.total_short == out.plan.total_shortage


def test_weekend_uses_the_weekend_pt_length():
    rows = [{"Hour": h, "Staff": 1, "Is_Weekend": 1} for h in range(10, 16)]
    conf = PlanConfig(CAP_FT=0, CAP_PT=2, PT_LENGTH_HOURS=4, WEEKEND_PT_LENGTH_HOURS=6)
    out = run_planner(conf, rows=rows, enable_reporting=False)

    assert out.plan.pt_length_hours == 6
    assert out.plan.shifts_pt == (ShiftWindow(ShiftType.PT, 10, 16, 1),)
    assert out.hires is None


def test_requirement_takes_precedence_over_rows():
    conf = PlanConfig(CAP_FT=1, CAP_PT=0)
    day = build_requirement([{"Hour": 0, "Staff": 1}])
    out = run_planner(conf, rows=weekday_rows(), requirement=day, enable_reporting=False)
    assert out.requirement is day
    assert out.plan.shifts_ft == (ShiftWindow(ShiftType.FT, 0, 8, 1),)


def test_input_builder_is_used_without_rows():
    seen = []

    def builder(conf):
        seen.append(conf)
        return build_requirement([{"Hour": 12, "Staff": 1}])

    conf = PlanConfig(CAP_FT=1, CAP_PT=1)
    out = run_planner(conf, input_builder=builder, enable_reporting=False)
    assert seen == [conf]
    assert out.plan.coverage[12] == 1


def test_default_input_builder_plans_a_synthetic_day():
    out = run_planner(PlanConfig(CAP_FT=8, CAP_PT=4), enable_reporting=False)
    assert sum(out.requirement.required) > 0
    assert out.plan.placed_ft > 0


def test_invalid_config_is_rejected_before_planning():
    with pytest.raises(ValueError):
        run_planner(PlanConfig(PT_LENGTH_HOURS=5), rows=[], enable_reporting=False)


def test_reporter_hooks_are_called_in_order():
    calls = []

    class RecordingReporter:
        def pre_plan(self, precheck):
            calls.append(("pre", precheck.peak_required))

        def post_plan(self, outputs):
            calls.append(("post", outputs.plan.placed_ft))

    conf = PlanConfig(CAP_FT=5, CAP_PT=0)
    run_planner(conf, rows=weekday_rows(), reporter=RecordingReporter())
    assert calls == [("pre", 5), ("post", 5)]


def test_reporting_disabled_skips_reporter():
    class Exploding:
        def pre_plan(self, precheck):
            raise AssertionError("should not be called")

        post_plan = pre_plan

    run_planner(
        PlanConfig(CAP_FT=1),
        rows=weekday_rows(),
        reporter=Exploding(),
        enable_reporting=False,
    )


def test_output_dir_receives_artifacts(tmp_path):
    rows = [dict(r, DateLabel="2025-10-14") for r in weekday_rows()]
    run_planner(
        PlanConfig(CAP_FT=5, CAP_PT=0),
        rows=rows,
        enable_reporting=False,
        output_dir=tmp_path,
    )
    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == [
        "schedule_2025-10-14.json",
        "schedule_2025-10-14_coverage.csv",
        "schedule_2025-10-14_coverage.png",
        "schedule_2025-10-14_hires.csv",
        "schedule_2025-10-14_roster.csv",
        "schedule_2025-10-14_shifts.csv",
    ]


def test_output_dir_handles_slashed_date_labels(tmp_path):
    rows = [dict(r, DateLabel="10/18/2025") for r in weekday_rows()]
    run_planner(
        PlanConfig(CAP_FT=3, CAP_PT=1),
        rows=rows,
        enable_reporting=False,
        output_dir=tmp_path,
    )
    assert (tmp_path / "schedule_10-18-2025_roster.csv").exists()
    assert [p for p in tmp_path.iterdir() if p.is_dir()] == []
