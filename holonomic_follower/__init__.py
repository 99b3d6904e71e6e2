"""Closed-loop trajectory following for holonomic (mecanum) drivetrains."""

from .builder import HolonomicAutoBuilder
from .config import PIDGains, SimulatorConfig
from .controller import HolonomicDriveController
from .errors import (
    ConfigurationConflict,
    FollowerError,
    FollowerException,
    InvalidTrajectorySample,
)
from .follower import FollowerState, TrajectoryFollower
from .geometry import ChassisSpeeds, Pose2d, wrap_angle
from .kinematics import KinematicsConverter, MecanumDriveKinematics, MecanumWheelSpeeds
from .output import (
    ChassisSpeedOutput,
    DriveMode,
    WheelSpeedOutput,
    resolve_drive_output,
)
from .pid import PIDController
from .sim import HolonomicSimulator, SimulationStep
from .telemetry import FollowerSample, TelemetryLogger
from .trajectory import (
    Trajectory,
    TrajectorySampler,
    TrajectoryState,
    constant_velocity_trajectory,
    line_trajectory,
)

__all__ = [
    "ChassisSpeedOutput",
    "ChassisSpeeds",
    "ConfigurationConflict",
    "DriveMode",
    "FollowerError",
    "FollowerException",
    "FollowerSample",
    "FollowerState",
    "HolonomicAutoBuilder",
    "HolonomicDriveController",
    "HolonomicSimulator",
    "InvalidTrajectorySample",
    "KinematicsConverter",
    "MecanumDriveKinematics",
    "MecanumWheelSpeeds",
    "PIDController",
    "PIDGains",
    "Pose2d",
    "SimulationStep",
    "SimulatorConfig",
    "TelemetryLogger",
    "Trajectory",
    "TrajectoryFollower",
    "TrajectorySampler",
    "TrajectoryState",
    "WheelSpeedOutput",
    "constant_velocity_trajectory",
    "line_trajectory",
    "resolve_drive_output",
    "wrap_angle",
]
