from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .config import SimulatorConfig
from .geometry import ChassisSpeeds, Pose2d, wrap_angle
from .kinematics import MecanumDriveKinematics, MecanumWheelSpeeds


@dataclass
class SimulationStep:
    time_s: float
    pose: Pose2d
    velocity: ChassisSpeeds
    command: ChassisSpeeds


class HolonomicSimulator:
    """Ideal holonomic chassis with a first-order lag on commanded speeds.

    Commands are latched like a motor controller setpoint: the most recent one
    is applied on every ``step`` until replaced.
    """

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        initial_pose: Pose2d | None = None,
        kinematics: MecanumDriveKinematics | None = None,
    ) -> None:
        self._config = config or SimulatorConfig()
        self.dt = float(self._config.dt)
        self.kinematics = kinematics
        self.pose = initial_pose or Pose2d()
        self.velocity = ChassisSpeeds()
        self.command = ChassisSpeeds()
        self.time_s = 0.0

    def reset(self, pose: Pose2d | None = None, time_s: float = 0.0) -> None:
        self.pose = pose or Pose2d()
        self.velocity = ChassisSpeeds()
        self.command = ChassisSpeeds()
        self.time_s = float(time_s)

    def get_pose(self) -> Pose2d:
        return self.pose

    def set_chassis_speeds(self, speeds: ChassisSpeeds) -> None:
        self.command = speeds

    def set_wheel_speeds(self, wheel_speeds: MecanumWheelSpeeds) -> None:
        if self.kinematics is None:
            raise ValueError("Simulator needs kinematics to accept wheel speeds.")
        self.command = self.kinematics.to_chassis_speeds(wheel_speeds)

    def step(self, dt: float | None = None) -> SimulationStep:
        dt = float(dt if dt is not None else self.dt)
        if dt <= 0.0:
            raise ValueError("dt must be positive")

        tau = self._config.velocity_time_constant
        alpha = 1.0 if tau <= 0.0 else 1.0 - math.exp(-dt / tau)
        current = self.velocity.as_array()
        target = _limit_speeds(self.command.as_array(), self._config)
        velocity = current + alpha * (target - current)
        self.velocity = ChassisSpeeds.from_array(velocity)

        # Integrate in the field frame using the mid-step heading.
        mid_heading = self.pose.heading_rad + 0.5 * self.velocity.omega * dt
        field = self.velocity.to_field_relative(mid_heading)
        self.pose = Pose2d(
            self.pose.x + field.vx * dt,
            self.pose.y + field.vy * dt,
            wrap_angle(self.pose.heading_rad + self.velocity.omega * dt),
        )

        self.time_s += dt
        return SimulationStep(
            time_s=self.time_s,
            pose=self.pose,
            velocity=self.velocity,
            command=self.command,
        )


def _limit_speeds(speeds: np.ndarray, config: SimulatorConfig) -> np.ndarray:
    limited = np.array(speeds, copy=True, dtype=float)
    norm = float(np.hypot(limited[0], limited[1]))
    if norm > config.max_speed_m_s:
        limited[:2] *= config.max_speed_m_s / norm
    limited[2] = float(
        np.clip(limited[2], -config.max_angular_speed_rad_s, config.max_angular_speed_rad_s)
    )
    return limited
