# tests/test_progress.py
import re
from unittest.mock import patch

import pytest

from shiftplan.planner import plan
from shiftplan.progress import MinimalProgress
from shiftplan.result_types import CapacityLimits


@pytest.fixture
def callback():
    """MinimalProgress that logs the first placement and every third after."""
    return MinimalProgress(log_every=3)


@pytest.fixture
def mock_print():
    """Patch print in the progress module to capture output."""
    with patch("shiftplan.progress.print") as m:
        yield m


def run_tiny_plan(callback):
    """Seven FT shifts needed at hour 10, nothing else."""
    required = [0] * 24
    required[10] = 7
    limits = CapacityLimits(cap_ft=7, cap_pt=0, max_ft_shifts=7, max_pt_shifts=0)
    return plan(required, limits, strategy="ft_first", progress_cb=callback)


def test_progress_callback_is_called(callback, mock_print):
    res = run_tiny_plan(callback)

    assert res.placed_ft == 7
    assert callback.placements == 7
    # legend + placements 1, 3 and 6
    assert mock_print.call_count == 4


def test_progress_print_format(callback, mock_print):
    run_tiny_plan(callback)

    lines = [c.args[0] for c in mock_print.call_args_list]
    assert "score:" in lines[0] and "left:" in lines[0]

    pattern = re.compile(
        r"^\[\s*\d+\] FT \d{2}-\d{2} \| score=\d+\s* \| left=\d+\s* \| placed=\d+\s*$"
    )
    for line in lines[1:]:
        assert pattern.match(line), line
    assert lines[1].startswith("[   1] FT 03-11 | score=7")


def test_placement_history_is_recorded(callback, mock_print):
    run_tiny_plan(callback)

    history = callback.placement_history()
    assert [h[0] for h in history] == list(range(1, 8))
    assert [h[1] for h in history] == [7, 6, 5, 4, 3, 2, 1]
    assert history[-1][2] == 0
    # returns a copy
    history.clear()
    assert len(callback.placement_history()) == 7


def test_log_every_is_at_least_one():
    assert MinimalProgress(log_every=0).log_every == 1
