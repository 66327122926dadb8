from .config import PlanConfig, cfg
from .input_data import DayRequirement, build_requirement
from .main import run_planner
from .planner import plan

__all__ = [
    "PlanConfig",
    "cfg",
    "DayRequirement",
    "build_requirement",
    "plan",
    "run_planner",
]
