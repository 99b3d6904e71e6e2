from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from .geometry import ChassisSpeeds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MecanumWheelSpeeds:
    """Wheel surface speeds in m/s, positive driving the robot forward."""

    front_left: float = 0.0
    front_right: float = 0.0
    rear_left: float = 0.0
    rear_right: float = 0.0

    def __post_init__(self) -> None:
        for name in ("front_left", "front_right", "rear_left", "rear_right"):
            object.__setattr__(self, name, float(getattr(self, name)))

    def as_array(self) -> np.ndarray:
        return np.array(
            [self.front_left, self.front_right, self.rear_left, self.rear_right],
            dtype=float,
        )

    @classmethod
    def from_array(cls, values: Sequence[float] | np.ndarray) -> MecanumWheelSpeeds:
        values = np.asarray(values, dtype=float)
        if values.shape != (4,):
            raise ValueError(
                f"MecanumWheelSpeeds requires a length-4 array; received shape {values.shape}"
            )
        return cls(*values.tolist())

    def max_abs(self) -> float:
        return float(np.max(np.abs(self.as_array())))

    def desaturate(self, max_speed: float) -> MecanumWheelSpeeds:
        """Scale every wheel by the same factor so none exceeds ``max_speed``.

        Scaling all wheels together keeps the ratio between them, and with it
        the direction of travel, intact.
        """
        if max_speed < 0.0 or not math.isfinite(max_speed):
            raise ValueError("max_speed must be finite and non-negative.")
        peak = self.max_abs()
        if peak <= max_speed:
            return self
        scale = max_speed / peak
        logger.debug("Desaturating wheel speeds by %.3f (peak %.3f m/s)", scale, peak)
        return MecanumWheelSpeeds.from_array(self.as_array() * scale)


class KinematicsConverter(Protocol):
    def to_wheel_speeds(self, speeds: ChassisSpeeds) -> MecanumWheelSpeeds: ...


class MecanumDriveKinematics:
    """Inverse/forward kinematics for a four-wheel mecanum chassis.

    Wheel locations are ``(x, y)`` offsets from the robot centre in metres,
    x forward and y to the left, with rollers in the usual X configuration
    when seen from above.
    """

    def __init__(
        self,
        front_left: Sequence[float],
        front_right: Sequence[float],
        rear_left: Sequence[float],
        rear_right: Sequence[float],
    ):
        locations = np.array(
            [front_left, front_right, rear_left, rear_right], dtype=float
        )
        if locations.shape != (4, 2):
            raise ValueError("Each wheel location must be an (x, y) pair.")
        self.wheel_locations = locations

        fl, fr, rl, rr = locations
        self._inverse = np.array(
            [
                [1.0, -1.0, -(fl[0] + fl[1])],
                [1.0, 1.0, fr[0] - fr[1]],
                [1.0, 1.0, rl[0] - rl[1]],
                [1.0, -1.0, -(rr[0] + rr[1])],
            ],
            dtype=float,
        )
        self._forward = np.linalg.pinv(self._inverse)

    @classmethod
    def rectangular(cls, wheelbase_m: float, track_width_m: float) -> MecanumDriveKinematics:
        if wheelbase_m <= 0.0 or track_width_m <= 0.0:
            raise ValueError("wheelbase_m and track_width_m must be positive.")
        half_x = wheelbase_m / 2.0
        half_y = track_width_m / 2.0
        return cls(
            (half_x, half_y),
            (half_x, -half_y),
            (-half_x, half_y),
            (-half_x, -half_y),
        )

    def to_wheel_speeds(self, speeds: ChassisSpeeds) -> MecanumWheelSpeeds:
        return MecanumWheelSpeeds.from_array(self._inverse @ speeds.as_array())

    def to_chassis_speeds(self, wheel_speeds: MecanumWheelSpeeds) -> ChassisSpeeds:
        return ChassisSpeeds.from_array(self._forward @ wheel_speeds.as_array())
