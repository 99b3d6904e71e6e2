from __future__ import annotations

import bisect
import math
from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence, Tuple

import numpy as np

from .geometry import ChassisSpeeds, Pose2d, wrap_angle


@dataclass(frozen=True)
class TrajectoryState:
    """Reference sample: desired pose and field-relative velocity at ``time_s``."""

    time_s: float
    pose: Pose2d
    velocity: ChassisSpeeds

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_s", float(self.time_s))

    def is_finite(self) -> bool:
        return (
            math.isfinite(self.time_s)
            and self.pose.is_finite()
            and self.velocity.is_finite()
        )


class TrajectorySampler(Protocol):
    @property
    def total_time_s(self) -> float: ...

    def sample(self, time_s: float) -> TrajectoryState: ...


@dataclass(frozen=True)
class Trajectory:
    """Time-ordered reference states, linearly interpolated between samples.

    ``sample`` takes the time elapsed since the first state and clamps to the
    ends of the trajectory.
    """

    states: Tuple[TrajectoryState, ...]

    def __post_init__(self) -> None:
        if not self.states:
            raise ValueError("Trajectory must contain at least one state.")
        states = tuple(self.states)
        if any(
            later.time_s < earlier.time_s
            for earlier, later in zip(states, states[1:])
        ):
            raise ValueError("Trajectory state times must be non-decreasing.")
        object.__setattr__(self, "states", states)

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[TrajectoryState]:
        return iter(self.states)

    @property
    def start_time_s(self) -> float:
        return self.states[0].time_s

    @property
    def end_time_s(self) -> float:
        return self.states[-1].time_s

    @property
    def total_time_s(self) -> float:
        return self.end_time_s - self.start_time_s

    @property
    def initial_pose(self) -> Pose2d:
        return self.states[0].pose

    def sample(self, time_s: float) -> TrajectoryState:
        lookup_time = self.start_time_s + float(time_s)
        if len(self.states) == 1 or lookup_time <= self.start_time_s:
            return self.states[0]
        if lookup_time >= self.end_time_s:
            return self.states[-1]

        lower, upper = _get_lower_upper_state_bounds(self.states, lookup_time)
        dt = upper.time_s - lower.time_s
        alpha = (lookup_time - lower.time_s) / dt if dt > 0.0 else 0.0

        position = lower.pose.position + alpha * (upper.pose.position - lower.pose.position)
        heading = _lerp_angle(lower.pose.heading_rad, upper.pose.heading_rad, alpha)
        velocity = lower.velocity.as_array() + alpha * (
            upper.velocity.as_array() - lower.velocity.as_array()
        )
        return TrajectoryState(
            time_s=lookup_time,
            pose=Pose2d(position[0], position[1], heading),
            velocity=ChassisSpeeds.from_array(velocity),
        )


def _get_lower_upper_state_bounds(
    states: Sequence[TrajectoryState], lookup_time_s: float
) -> tuple[TrajectoryState, TrajectoryState]:
    times = [state.time_s for state in states]
    upper_idx = bisect.bisect_left(times, lookup_time_s)
    if upper_idx >= len(states):
        upper_idx = len(states) - 1
        lower_idx = upper_idx - 1
    elif upper_idx == 0:
        lower_idx = 0
        upper_idx = 1
    else:
        lower_idx = upper_idx - 1
    return states[lower_idx], states[upper_idx]


def _lerp_angle(a: float, b: float, alpha: float) -> float:
    return wrap_angle(a + alpha * wrap_angle(b - a))


def constant_velocity_trajectory(
    velocity: ChassisSpeeds,
    duration_s: float,
    start_pose: Pose2d | None = None,
    sample_period_s: float = 0.02,
) -> Trajectory:
    """Reference that moves at a fixed field-relative velocity for ``duration_s``."""
    if duration_s <= 0.0:
        raise ValueError("duration_s must be positive")
    if sample_period_s <= 0.0:
        raise ValueError("sample_period_s must be positive")

    start = start_pose or Pose2d()
    num_intervals = max(1, int(math.ceil(duration_s / sample_period_s)))
    times = np.linspace(0.0, duration_s, num_intervals + 1)
    states = tuple(
        TrajectoryState(
            time_s=t,
            pose=Pose2d(
                start.x + velocity.vx * t,
                start.y + velocity.vy * t,
                wrap_angle(start.heading_rad + velocity.omega * t),
            ),
            velocity=velocity,
        )
        for t in times
    )
    return Trajectory(states)


def line_trajectory(
    speed_m_s: float = 1.0,
    direction_rad: float = 0.0,
    duration_s: float = 2.0,
    start_pose: Pose2d | None = None,
    end_heading_rad: float | None = None,
    sample_period_s: float = 0.02,
) -> Trajectory:
    """Straight-line reference, optionally rotating to ``end_heading_rad`` on the way.

    ``direction_rad`` is the field-frame direction of travel, independent of
    the robot heading since the drivetrain is holonomic.
    """
    if speed_m_s < 0.0:
        raise ValueError("speed_m_s must be non-negative")
    start = start_pose or Pose2d()
    heading_change = 0.0
    if end_heading_rad is not None:
        heading_change = wrap_angle(end_heading_rad - start.heading_rad)
    velocity = ChassisSpeeds(
        vx=speed_m_s * math.cos(direction_rad),
        vy=speed_m_s * math.sin(direction_rad),
        omega=heading_change / duration_s if duration_s > 0.0 else 0.0,
    )
    return constant_velocity_trajectory(velocity, duration_s, start, sample_period_s)
