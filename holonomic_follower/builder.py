from __future__ import annotations

import logging
import time
from typing import Callable

from .config import PIDGains
from .controller import HolonomicDriveController
from .follower import Clock, PoseSource, SampleCallback, TrajectoryFollower
from .geometry import Pose2d
from .kinematics import KinematicsConverter
from .output import (
    ChassisSpeedConsumer,
    DriveMode,
    DriveOutput,
    WheelSpeedConsumer,
    resolve_drive_output,
)
from .trajectory import Trajectory, TrajectorySampler

logger = logging.getLogger(__name__)


class HolonomicAutoBuilder:
    """Build trajectory followers for a mecanum drivetrain.

    The drive output is fixed when the builder is constructed. Supply either

    * ``output=ChassisSpeedOutput(...)`` / ``output_chassis_speeds=`` to send
      robot-relative chassis speeds, or
    * ``output=WheelSpeedOutput(...)`` / ``kinematics=``, ``max_wheel_speed=``
      and ``output_wheel_speeds=`` to send desaturated wheel speeds.

    Any other combination raises ``ConfigurationConflict``. The translation
    gains parameterize both the x and the y controller of every follower.
    """

    def __init__(
        self,
        pose_source: PoseSource,
        translation_gains: PIDGains,
        rotation_gains: PIDGains,
        output: DriveOutput | None = None,
        *,
        kinematics: KinematicsConverter | None = None,
        max_wheel_speed: float | None = None,
        output_wheel_speeds: WheelSpeedConsumer | None = None,
        output_chassis_speeds: ChassisSpeedConsumer | None = None,
        reset_pose: Callable[[Pose2d], None] | None = None,
        clock: Clock = time.monotonic,
        sample_callback: SampleCallback | None = None,
    ):
        self._output = resolve_drive_output(
            output,
            kinematics=kinematics,
            max_wheel_speed=max_wheel_speed,
            output_wheel_speeds=output_wheel_speeds,
            output_chassis_speeds=output_chassis_speeds,
        )
        self.pose_source = pose_source
        self.translation_gains = translation_gains
        self.rotation_gains = rotation_gains
        self._reset_pose = reset_pose
        self._clock = clock
        self._sample_callback = sample_callback
        logger.debug("Auto builder configured for %s", self._output.mode.value)

    @property
    def drive_mode(self) -> DriveMode:
        return self._output.mode

    @property
    def output(self) -> DriveOutput:
        return self._output

    def follow_trajectory(self, trajectory: TrajectorySampler) -> TrajectoryFollower:
        """Return a fresh follower, with its own controllers, bound to ``trajectory``."""
        controller = HolonomicDriveController(self.translation_gains, self.rotation_gains)
        return TrajectoryFollower(
            trajectory,
            self.pose_source,
            controller,
            self._output,
            clock=self._clock,
            sample_callback=self._sample_callback,
        )

    def reset_pose_to(self, trajectory: Trajectory) -> Pose2d:
        """Seed odometry with the first pose of ``trajectory``."""
        if self._reset_pose is None:
            raise ValueError("No reset_pose callback was configured.")
        pose = trajectory.initial_pose
        self._reset_pose(pose)
        return pose
