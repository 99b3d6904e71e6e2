from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from .errors import ConfigurationConflict
from .geometry import ChassisSpeeds
from .kinematics import KinematicsConverter, MecanumWheelSpeeds

ChassisSpeedConsumer = Callable[[ChassisSpeeds], None]
WheelSpeedConsumer = Callable[[MecanumWheelSpeeds], None]


class DriveMode(Enum):
    CHASSIS_OUTPUT = "chassis_output"
    WHEEL_OUTPUT = "wheel_output"


@dataclass(frozen=True)
class ChassisSpeedOutput:
    """Send chassis speeds straight to the drivetrain."""

    consumer: ChassisSpeedConsumer

    @property
    def mode(self) -> DriveMode:
        return DriveMode.CHASSIS_OUTPUT

    def emit(self, speeds: ChassisSpeeds) -> ChassisSpeeds:
        self.consumer(speeds)
        return speeds

    def stop(self) -> ChassisSpeeds:
        return self.emit(ChassisSpeeds())


@dataclass(frozen=True)
class WheelSpeedOutput:
    """Convert chassis speeds to desaturated mecanum wheel speeds."""

    kinematics: KinematicsConverter
    max_wheel_speed: float
    consumer: WheelSpeedConsumer

    def __post_init__(self) -> None:
        if not math.isfinite(self.max_wheel_speed) or self.max_wheel_speed <= 0.0:
            raise ConfigurationConflict(
                "max_wheel_speed must be a positive, finite wheel speed."
            )

    @property
    def mode(self) -> DriveMode:
        return DriveMode.WHEEL_OUTPUT

    def emit(self, speeds: ChassisSpeeds) -> MecanumWheelSpeeds:
        wheel_speeds = self.kinematics.to_wheel_speeds(speeds).desaturate(
            self.max_wheel_speed
        )
        self.consumer(wheel_speeds)
        return wheel_speeds

    def stop(self) -> MecanumWheelSpeeds:
        wheel_speeds = MecanumWheelSpeeds()
        self.consumer(wheel_speeds)
        return wheel_speeds


DriveOutput = Union[ChassisSpeedOutput, WheelSpeedOutput]


def resolve_drive_output(
    output: DriveOutput | None = None,
    *,
    kinematics: KinematicsConverter | None = None,
    max_wheel_speed: float | None = None,
    output_wheel_speeds: WheelSpeedConsumer | None = None,
    output_chassis_speeds: ChassisSpeedConsumer | None = None,
) -> DriveOutput:
    """Pick exactly one output strategy from the supplied configuration.

    Either an already-built output variant is passed on its own, or the flat
    keyword form describes one: kinematics, a wheel-speed cap and a wheel
    consumer, or a chassis consumer alone. Anything else is rejected.
    """
    flat_supplied = {
        name
        for name, value in (
            ("kinematics", kinematics),
            ("max_wheel_speed", max_wheel_speed),
            ("output_wheel_speeds", output_wheel_speeds),
            ("output_chassis_speeds", output_chassis_speeds),
        )
        if value is not None
    }

    if output is not None:
        if flat_supplied:
            raise ConfigurationConflict(
                "Pass either an output strategy or output keywords, not both "
                f"(also got {sorted(flat_supplied)})."
            )
        if not isinstance(output, (ChassisSpeedOutput, WheelSpeedOutput)):
            raise ConfigurationConflict(
                f"Unsupported drive output {type(output).__name__}."
            )
        return output

    if output_wheel_speeds is not None and output_chassis_speeds is not None:
        raise ConfigurationConflict(
            "Both a wheel-speed and a chassis-speed consumer were supplied."
        )

    if output_chassis_speeds is not None:
        extra = flat_supplied - {"output_chassis_speeds"}
        if extra:
            raise ConfigurationConflict(
                f"Chassis-speed output does not take {sorted(extra)}."
            )
        return ChassisSpeedOutput(output_chassis_speeds)

    if output_wheel_speeds is not None:
        missing = {"kinematics", "max_wheel_speed"} - flat_supplied
        if missing:
            raise ConfigurationConflict(
                f"Wheel-speed output also requires {sorted(missing)}."
            )
        return WheelSpeedOutput(kinematics, float(max_wheel_speed), output_wheel_speeds)

    raise ConfigurationConflict(
        "No drive output configured; supply a chassis-speed consumer or "
        "kinematics, max_wheel_speed and a wheel-speed consumer."
    )
