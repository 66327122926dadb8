from __future__ import annotations

import matplotlib

matplotlib.use("Agg", force=True)
from shiftplan.config import PlanConfig
from shiftplan.hiring import recommend
from shiftplan.input_data import build_requirement
from shiftplan.planner import plan
from shiftplan.precheck import precheck_capacity
from shiftplan.reporting.text_report import (
    ReportDocument,
    _fmt_float,
    _log_print,
    print_precheck,
    render_text_report,
    set_active_report,
)
from shiftplan.result_types import PlanOutputs
from shiftplan.roster import build_roster


def make_outputs(rows, conf):
    day = build_requirement(rows, date="2025-10-14")
    res = plan(day.required, conf.resolve_limits(), strategy=conf.STRATEGY)
    return PlanOutputs(
        requirement=day,
        config=conf,
        plan=res,
        hires=recommend(res.shortage, res.pt_length_hours),
        roster=build_roster(res.shifts_ft, res.shifts_pt, conf.LUNCH_MINUTES),
    )


def test_fmt_float_handles_missing_values():
    assert _fmt_float(None) == "nan"
    assert _fmt_float(float("nan")) == "nan"
    assert _fmt_float(0.5, nd=1, as_pct=True) == "50.0%"
    assert _fmt_float(1.234) == "1.23"


def test_log_print_records_to_active_report(tmp_path, capsys):
    doc = ReportDocument(tmp_path / "r.pdf")
    set_active_report(doc)
    try:
        _log_print("hello", "world")
    finally:
        set_active_report(None)
    assert doc.lines == ["hello world"]
    assert "hello world" in capsys.readouterr().out


def test_report_for_covered_plan(capsys):
    rows = [{"Hour": h, "Staff": 2, "CALLS": 30, "ASA": 1.5} for h in range(9, 17)]
    render_text_report(make_outputs(rows, PlanConfig(CAP_FT=2, CAP_PT=0)))
    out = capsys.readouterr().out

    assert "Plan status: COVERED" in out
    assert "Day: 2025-10-14 | weekend=False | strategy=auto" in out
    assert "Forecast: hours=24 | total calls=240" in out
    assert "Shift plan:" in out
    assert "9:00" in out and "17:00" in out
    assert "Per-hour gaps: every hour meets its requirement." in out
    assert "Hire recommendation: none needed." in out
    assert "FT-1" in out


def test_report_for_short_plan(capsys):
    rows = [{"Hour": 12, "Staff": 5}]
    render_text_report(make_outputs(rows, PlanConfig(CAP_FT=1, CAP_PT=1)))
    out = capsys.readouterr().out

    assert "Plan status: SHORTAGE" in out
    assert "Forecast:" not in out
    assert "Top per-hour gaps:" in out
    assert "12:00 required=5 coverage=2 short=3 (above cap FT + cap PT)" in out
    assert "Hire recommendation (lower bounds):" in out
    assert "FT only (8h)" in out


def test_report_for_empty_plan(capsys):
    render_text_report(make_outputs([], PlanConfig()))
    out = capsys.readouterr().out
    assert "Shift plan: (no shifts placed)" in out
    assert "Roster: (empty)" in out


def test_print_precheck_lists_unattainable_hours(capsys):
    required = [0] * 24
    required[7] = 9
    conf = PlanConfig(CAP_FT=2, CAP_PT=1)
    print_precheck(precheck_capacity(required, conf.resolve_limits(), 4))
    out = capsys.readouterr().out

    assert "peak required = 9" in out
    assert "concurrent capacity (cap FT + cap PT) = 3" in out
    assert "07:00" in out


def test_report_document_writes_pdf(tmp_path):
    doc = ReportDocument(tmp_path / "nested" / "report.pdf")
    doc.add_text("line")
    doc.write()
    assert (tmp_path / "nested" / "report.pdf").exists()
