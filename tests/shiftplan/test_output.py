from __future__ import annotations

import json

import matplotlib

matplotlib.use("Agg", force=True)
from shiftplan.config import PlanConfig
from shiftplan.hiring import recommend
from shiftplan.input_data import build_requirement
from shiftplan.output import (
    COVERAGE_COLUMNS,
    HIRE_COLUMNS,
    ROSTER_COLUMNS,
    SHIFT_COLUMNS,
    coverage_table,
    hire_table,
    plan_to_dict,
    produce_outputs,
    roster_table,
    shift_table,
)
from shiftplan.planner import plan
from shiftplan.result_types import PlanOutputs
from shiftplan.roster import build_roster


def make_outputs(required_by_hour, conf: PlanConfig, date="2025-10-14"):
    rows = [{"Hour": h, "Staff": v} for h, v in required_by_hour.items()]
    day = build_requirement(rows, date=date)
    limits = conf.resolve_limits()
    res = plan(day.required, limits, strategy=conf.STRATEGY, pt_length_hours=4)
    return PlanOutputs(
        requirement=day,
        config=conf,
        plan=res,
        hires=recommend(res.shortage, 4),
        roster=build_roster(res.shifts_ft, res.shifts_pt, conf.LUNCH_MINUTES),
    )


def covered_outputs():
    return make_outputs(
        {h: 2 for h in range(9, 17)}, PlanConfig(CAP_FT=2, CAP_PT=0, STRATEGY="ft_first")
    )


def short_outputs():
    return make_outputs({12: 5}, PlanConfig(CAP_FT=1, CAP_PT=1, STRATEGY="ft_first"))


def test_coverage_table_has_one_row_per_hour():
    df = coverage_table(covered_outputs().plan)
    assert list(df.columns) == COVERAGE_COLUMNS
    assert len(df) == 24
    assert df["Hour"].iloc[0] == "0:00"
    assert df["Hour"].iloc[23] == "23:00"
    assert df.loc[9, "Required"] == 2
    assert df.loc[9, "Coverage"] == 2
    assert df["Short"].sum() == 0


def test_shift_and_roster_tables_use_clock_labels():
    out = covered_outputs()
    shifts = shift_table(out.plan)
    assert list(shifts.columns) == SHIFT_COLUMNS
    assert shifts.to_dict(orient="records") == [
        {"Type": "FT", "Start": "9:00", "End": "17:00", "Agents": 2}
    ]

    roster = roster_table(out.roster)
    assert list(roster.columns) == ROSTER_COLUMNS
    assert roster.iloc[0].to_dict() == {
        "Employee": "FT-1",
        "Type": "FT",
        "Start": "9:00",
        "End": "17:00",
        "Lunch Start": "13:00",
        "Lunch End": "13:30",
        "Hours": 8,
    }


def test_hire_table_lists_every_scenario():
    out = short_outputs()
    df = hire_table(out.hires)
    assert list(df.columns) == HIRE_COLUMNS
    assert list(df["Scenario"]) == [
        "Total short staff-hours",
        "Peak hourly short",
        "FT only (8h)",
        "PT only (4h, current)",
        "PT only (4h)",
        "PT only (6h)",
        "Mixed FT (8h)",
        "Mixed PT (4h)",
    ]
    assert df["Value"].iloc[0] == 3
    assert hire_table(None).empty


def test_plan_to_dict_is_json_ready():
    doc = plan_to_dict(short_outputs())
    text = json.dumps(doc)
    loaded = json.loads(text)

    assert loaded["inputs"]["date"] == "2025-10-14"
    assert loaded["inputs"]["limits"]["cap_ft"] == 1
    assert loaded["hires"]["mixed"] == {"ft": 3, "pt": 0, "lengthHours": 4}
    assert len(loaded["coverage"]) == 24
    assert loaded["shifts"]["ft"] == [{"start": 5, "end": 13, "count": 1}]
    assert loaded["shifts"]["pt"] == [{"start": 9, "end": 13, "count": 1}]


def test_produce_outputs_writes_named_artifacts(tmp_path):
    written = produce_outputs(covered_outputs(), tmp_path)

    assert set(written) == {"coverage", "shifts", "hires", "roster", "json", "chart"}
    assert written["coverage"].name == "schedule_2025-10-14_coverage.csv"
    assert written["json"].name == "schedule_2025-10-14.json"
    for path in written.values():
        assert path.exists()

    lines = written["coverage"].read_text().splitlines()
    assert lines[0] == "Hour,Required,Coverage,Short,Excess"
    assert lines[10] == "9:00,2,2,0,0"
    roster = written["roster"].read_text().splitlines()
    assert roster[0] == "Employee,Type,Start,End,Lunch Start,Lunch End,Hours"
    assert roster[1] == "FT-1,FT,9:00,17:00,13:00,13:30,8"
    assert written["hires"].read_text().strip() == "Scenario,Value"


def test_produce_outputs_can_skip_the_chart(tmp_path):
    written = produce_outputs(covered_outputs(), tmp_path, enable_plot=False)
    assert "chart" not in written
    assert not list(tmp_path.glob("*.png"))


def test_produce_outputs_sanitises_path_like_labels(tmp_path):
    out = make_outputs(
        {h: 2 for h in range(9, 17)},
        PlanConfig(CAP_FT=2, CAP_PT=0, STRATEGY="ft_first"),
        date="10/18/2025",
    )
    written = produce_outputs(out, tmp_path, enable_plot=False)

    assert written["coverage"].name == "schedule_10-18-2025_coverage.csv"
    assert written["json"].name == "schedule_10-18-2025.json"
    assert all(path.parent == tmp_path for path in written.values())
    assert all(path.exists() for path in written.values())
