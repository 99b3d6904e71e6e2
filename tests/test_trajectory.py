"""Tests for trajectory sampling and the reference factories."""

from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from holonomic_follower.geometry import ChassisSpeeds, Pose2d
from holonomic_follower.trajectory import (
    Trajectory,
    TrajectoryState,
    constant_velocity_trajectory,
    line_trajectory,
)


def _two_state_trajectory() -> Trajectory:
    return Trajectory(
        (
            TrajectoryState(0.0, Pose2d(0.0, 0.0, math.radians(170.0)), ChassisSpeeds(0.0, 0.0, 0.0)),
            TrajectoryState(2.0, Pose2d(2.0, -1.0, math.radians(-170.0)), ChassisSpeeds(2.0, 0.0, 0.0)),
        )
    )


def test_sample_interpolates_between_states() -> None:
    state = _two_state_trajectory().sample(1.0)
    assert math.isclose(state.pose.x, 1.0)
    assert math.isclose(state.pose.y, -0.5)
    assert math.isclose(state.velocity.vx, 1.0)
    # Halfway along the short arc from 170 deg to -170 deg is 180 deg.
    assert math.isclose(abs(state.pose.heading_rad), math.pi, abs_tol=1e-9)


def test_sample_clamps_to_ends() -> None:
    trajectory = _two_state_trajectory()
    assert trajectory.sample(-1.0) is trajectory.states[0]
    assert trajectory.sample(5.0) is trajectory.states[-1]


def test_total_time_is_measured_from_first_state() -> None:
    trajectory = Trajectory(
        (
            TrajectoryState(1.0, Pose2d(), ChassisSpeeds()),
            TrajectoryState(3.5, Pose2d(1.0, 0.0, 0.0), ChassisSpeeds()),
        )
    )
    assert math.isclose(trajectory.total_time_s, 2.5)
    assert math.isclose(trajectory.sample(1.25).pose.x, 0.5)


def test_unsorted_states_rejected() -> None:
    with pytest.raises(ValueError):
        Trajectory(
            (
                TrajectoryState(1.0, Pose2d(), ChassisSpeeds()),
                TrajectoryState(0.0, Pose2d(), ChassisSpeeds()),
            )
        )
    with pytest.raises(ValueError):
        Trajectory(())


def test_constant_velocity_trajectory() -> None:
    trajectory = constant_velocity_trajectory(
        ChassisSpeeds(1.0, 0.0, 0.0), duration_s=2.0, start_pose=Pose2d(0.5, 0.0, 0.0)
    )
    assert math.isclose(trajectory.total_time_s, 2.0)
    assert trajectory.initial_pose == Pose2d(0.5, 0.0, 0.0)
    state = trajectory.sample(0.73)
    assert math.isclose(state.pose.x, 1.23)
    assert np.allclose(state.velocity.as_array(), [1.0, 0.0, 0.0])


def test_line_trajectory_reaches_end_heading() -> None:
    trajectory = line_trajectory(
        speed_m_s=2.0,
        direction_rad=math.pi / 2.0,
        duration_s=3.0,
        end_heading_rad=math.radians(90.0),
    )
    final = trajectory.sample(trajectory.total_time_s)
    assert math.isclose(final.pose.x, 0.0, abs_tol=1e-9)
    assert math.isclose(final.pose.y, 6.0)
    assert math.isclose(final.pose.heading_rad, math.radians(90.0))
