# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import numpy as np
import pytest

from shiftplan.result_types import CapacityLimits


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Planning helpers
# -----------------------------
def limits(
    cap_ft: int, cap_pt: int, max_ft: int | None = None, max_pt: int | None = None
) -> CapacityLimits:
    return CapacityLimits(
        cap_ft=cap_ft,
        cap_pt=cap_pt,
        max_ft_shifts=cap_ft if max_ft is None else max_ft,
        max_pt_shifts=cap_pt if max_pt is None else max_pt,
    )


def curve(values: dict[int, int]) -> list[int]:
    """24-hour requirement with the given hours set, zeros elsewhere."""
    out = [0] * 24
    for h, v in values.items():
        out[h] = v
    return out


@pytest.fixture
def make_limits():
    return limits


@pytest.fixture
def make_curve():
    return curve
