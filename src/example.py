"""
Module with example code for running the shift planner.

There are three ways to run the code:

1. Run the code with default options. This will generate
    a synthetic weekday requirement curve and plan it with the default config.
2. Run the code with hourly rows defined via code (a weekend day, mixed strategy).
3. Run the code with a forecast payload pre-defined in a JSON file.

Usage via cli:
    python3 -m src.example --option 1
"""

from __future__ import annotations

import argparse
from pathlib import Path

from shiftplan import PlanConfig, run_planner
from shiftplan.config import cfg
from shiftplan.generate.requirements import (
    RequirementGenConfig,
    parse_day,
    requirement_from_json,
    synthetic_requirement,
)
from shiftplan.main import MinimalProgress, Reporter, default_input_builder


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run shift planning examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=3,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 3).",
    )
    parser.add_argument(
        "--day",
        type=str,
        default=None,
        help="ISO date for the synthetic day used by option 1 (e.g. 2025-10-18).",
    )
    return parser.parse_args()


def run_option(option: int, day: str | None = None) -> None:
    print(f"Running example code with option {option}")

    # Plan a synthetic day with the default config.
    if option == 1:

        # With no --day this is equivalent to:
        # run_planner(cfg)
        requirement = None
        if day is not None:
            requirement = synthetic_requirement(RequirementGenConfig(day=parse_day(day)))
        run_planner(
            config=cfg,
            requirement=requirement,
            validate_config=True,
            input_builder=default_input_builder,
            reporter=Reporter(cfg),
            enable_reporting=True,
            progress_cb=MinimalProgress(log_every=5),
            output_dir=Path("outputs"),
        )

    # Plan rows defined via code: a Saturday with a flat midday hump.
    elif option == 2:

        rows = [
            {"Hour": h, "Staff": 6.4 if 10 <= h < 16 else 2.2, "Is_Weekend": 1}
            for h in range(8, 20)
        ]
        weekend_cfg = PlanConfig(
            CAP_FT=4,
            CAP_PT=4,
            TOTAL_FT=3,
            TOTAL_PT="",
            STRATEGY="mixed",
            MIXED_FT_PERCENT=40,
            PT_LENGTH_HOURS=4,
            WEEKEND_PT_LENGTH_HOURS=6,
            LUNCH_MINUTES=45,
        )
        run_planner(weekend_cfg, rows=rows, output_dir=Path("outputs"))

    # Plan a forecast payload stored as JSON. Typical production use.
    elif option == 3:

        requirement = requirement_from_json(Path("src/example_forecast.json"))
        run_planner(
            cfg,
            requirement=requirement,
            progress_cb=MinimalProgress(log_every=10),
            output_dir=Path("outputs"),
        )
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    args = parse_args()
    run_option(args.option, day=args.day)


if __name__ == "__main__":
    main()
