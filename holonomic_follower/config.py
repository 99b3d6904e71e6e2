from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PIDGains:
    """Gains for a single-axis PID controller.

    ``i_zone`` disables and clears integral action while the absolute error is
    larger than the zone; ``integrator_limit`` clamps the accumulated integral;
    ``tolerance`` is the error band reported as "at setpoint". ``None`` leaves
    the corresponding feature off. ``period_s`` is the fixed control period the
    integral and derivative terms are computed with.
    """

    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0
    i_zone: float | None = None
    integrator_limit: float | None = None
    tolerance: float | None = None
    period_s: float = 0.02

    def __post_init__(self) -> None:
        for name in ("kp", "ki", "kd"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite.")
            if value < 0.0:
                raise ValueError(f"{name} must be non-negative.")
        if self.i_zone is not None and self.i_zone < 0.0:
            raise ValueError("i_zone must be non-negative.")
        if self.integrator_limit is not None and self.integrator_limit < 0.0:
            raise ValueError("integrator_limit must be non-negative.")
        if self.tolerance is not None and self.tolerance < 0.0:
            raise ValueError("tolerance must be non-negative.")
        if self.period_s <= 0.0:
            raise ValueError("period_s must be positive.")


@dataclass(frozen=True)
class SimulatorConfig:
    """Configuration for the ideal holonomic drivetrain simulator.

    Times are expressed in seconds; distances and velocities are in SI units.
    """

    dt: float = 0.02
    velocity_time_constant: float = 0.05
    max_speed_m_s: float = 4.5
    max_angular_speed_rad_s: float = 2.0 * math.pi

    def __post_init__(self) -> None:
        if self.dt <= 0.0:
            raise ValueError("dt must be positive.")
        if self.velocity_time_constant < 0.0:
            raise ValueError("velocity_time_constant must be non-negative.")
        if self.max_speed_m_s <= 0.0 or self.max_angular_speed_rad_s <= 0.0:
            raise ValueError("Velocity limits must be strictly positive.")
