"""Lightweight example scripts for the simulated mecanum follower demos."""

from holonomic_follower import Trajectory, line_trajectory

from .common import analyze_history, run_follower_example

__all__ = [
    "Trajectory",
    "analyze_history",
    "line_trajectory",
    "run_follower_example",
]
