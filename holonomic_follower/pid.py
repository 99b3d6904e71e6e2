from __future__ import annotations

from .config import PIDGains
from .geometry import wrap_angle


class PIDController:
    """Single-axis PID controller running at the fixed period of its gains.

    Each instance owns its integrator and previous-error state; two controllers
    built from the same ``PIDGains`` never share anything mutable.
    """

    def __init__(self, gains: PIDGains, continuous: bool = False):
        self.gains = gains
        self.continuous = continuous
        self.integrator = 0.0
        self.prev_error = 0.0
        self._has_prev_error = False

    def reset(self) -> None:
        self.integrator = 0.0
        self.prev_error = 0.0
        self._has_prev_error = False

    @property
    def at_setpoint(self) -> bool:
        tolerance = self.gains.tolerance
        if tolerance is None or not self._has_prev_error:
            return False
        return abs(self.prev_error) <= tolerance

    def calculate(self, measurement: float, setpoint: float) -> float:
        error = float(setpoint) - float(measurement)
        if self.continuous:
            error = wrap_angle(error)
        return self.step(error)

    def step(self, error: float) -> float:
        gains = self.gains
        dt = gains.period_s

        if gains.i_zone is not None and abs(error) > gains.i_zone:
            self.integrator = 0.0
        elif gains.ki != 0.0:
            self.integrator += error * dt
            limit = gains.integrator_limit
            if limit is not None:
                self.integrator = max(-limit, min(limit, self.integrator))

        # No derivative kick on the first sample after a reset.
        if self._has_prev_error:
            delta = error - self.prev_error
            if self.continuous:
                delta = wrap_angle(delta)
            derivative = delta / dt
        else:
            derivative = 0.0
        self.prev_error = error
        self._has_prev_error = True

        return gains.kp * error + gains.ki * self.integrator + gains.kd * derivative
