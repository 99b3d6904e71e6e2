from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation as R


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians to the half-open interval (-pi, pi]."""
    wrapped = math.remainder(float(angle), 2.0 * math.pi)
    if wrapped <= -math.pi:
        wrapped += 2.0 * math.pi
    return wrapped


def rotate_xy(vec: np.ndarray, angle_rad: float) -> np.ndarray:
    """Rotate a planar vector counter-clockwise by ``angle_rad``."""
    vec = np.asarray(vec, dtype=float).reshape(2)
    rotated = R.from_euler("z", float(angle_rad)).apply([vec[0], vec[1], 0.0])
    return np.asarray(rotated[:2], dtype=float)


@dataclass(frozen=True)
class Pose2d:
    """Planar robot pose in the field frame."""

    x: float = 0.0
    y: float = 0.0
    heading_rad: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "heading_rad", float(self.heading_rad))

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def error_to(self, target: Pose2d) -> Pose2d:
        """Return ``target - self`` with the heading taken along the shortest arc."""
        return Pose2d(
            x=target.x - self.x,
            y=target.y - self.y,
            heading_rad=wrap_angle(target.heading_rad - self.heading_rad),
        )

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.heading_rad))


@dataclass(frozen=True)
class ChassisSpeeds:
    """Chassis velocity: linear x/y in m/s and angular rate in rad/s."""

    vx: float = 0.0
    vy: float = 0.0
    omega: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "vx", float(self.vx))
        object.__setattr__(self, "vy", float(self.vy))
        object.__setattr__(self, "omega", float(self.omega))

    def as_array(self) -> np.ndarray:
        return np.array([self.vx, self.vy, self.omega], dtype=float)

    @classmethod
    def from_array(cls, values: np.ndarray) -> ChassisSpeeds:
        values = np.asarray(values, dtype=float)
        if values.shape != (3,):
            raise ValueError(
                f"ChassisSpeeds requires a length-3 array; received shape {values.shape}"
            )
        return cls(vx=values[0], vy=values[1], omega=values[2])

    @classmethod
    def from_field_relative(
        cls, vx: float, vy: float, omega: float, heading_rad: float
    ) -> ChassisSpeeds:
        """Express field-frame speeds in the frame of a robot facing ``heading_rad``."""
        robot_xy = rotate_xy(np.array([vx, vy]), -heading_rad)
        return cls(vx=robot_xy[0], vy=robot_xy[1], omega=omega)

    def to_field_relative(self, heading_rad: float) -> ChassisSpeeds:
        field_xy = rotate_xy(np.array([self.vx, self.vy]), heading_rad)
        return ChassisSpeeds(vx=field_xy[0], vy=field_xy[1], omega=self.omega)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.vx, self.vy, self.omega))
