from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable

from .controller import HolonomicDriveController
from .errors import FollowerError, FollowerException, InvalidTrajectorySample
from .geometry import ChassisSpeeds, Pose2d
from .kinematics import MecanumWheelSpeeds
from .output import DriveMode, DriveOutput
from .telemetry import FollowerSample
from .trajectory import TrajectorySampler, TrajectoryState

logger = logging.getLogger(__name__)

PoseSource = Callable[[], Pose2d]
Clock = Callable[[], float]
SampleCallback = Callable[[FollowerSample], None]


class FollowerState(Enum):
    INITIALIZED = "initialized"
    RUNNING = "running"
    FINISHED = "finished"


class TrajectoryFollower:
    """Track one trajectory, emitting one drive command per control step.

    The owning scheduler calls ``initialize`` once, then ``execute`` every
    period until ``is_finished`` reports true, then ``end``. ``step`` runs a
    single cycle at an explicit elapsed time and is what ``execute`` uses with
    the injected clock.
    """

    def __init__(
        self,
        trajectory: TrajectorySampler,
        pose_source: PoseSource,
        controller: HolonomicDriveController,
        output: DriveOutput,
        *,
        clock: Clock = time.monotonic,
        sample_callback: SampleCallback | None = None,
    ):
        self.trajectory = trajectory
        self._pose_source = pose_source
        self.controller = controller
        self._output = output
        self._clock = clock
        self._sample_callback = sample_callback

        self._state = FollowerState.INITIALIZED
        self._start_time_s: float | None = None
        self._elapsed_s = 0.0
        self._stop_sent = False
        self.last_sample: FollowerSample | None = None

    @property
    def state(self) -> FollowerState:
        return self._state

    @property
    def drive_mode(self) -> DriveMode:
        return self._output.mode

    @property
    def elapsed_s(self) -> float:
        return self._elapsed_s

    def initialize(self) -> None:
        """Begin a new run; controller history from any earlier run is dropped."""
        self.controller.reset()
        self._start_time_s = float(self._clock())
        self._elapsed_s = 0.0
        self._stop_sent = False
        self.last_sample = None
        self._state = FollowerState.RUNNING
        logger.info(
            "Following trajectory (%.2f s) with %s",
            self.trajectory.total_time_s,
            self.drive_mode.value,
        )

    def execute(self) -> None:
        if self._start_time_s is None:
            raise FollowerException(
                FollowerError.NOT_INITIALIZED, "execute() called before initialize()."
            )
        self.step(float(self._clock()) - self._start_time_s)

    def step(self, elapsed_s: float) -> ChassisSpeeds | None:
        """Run one control cycle at ``elapsed_s`` into the trajectory.

        Returns the robot-relative chassis command that was emitted, or
        ``None`` once the run has finished.
        """
        if self._state is FollowerState.INITIALIZED:
            raise FollowerException(
                FollowerError.NOT_INITIALIZED, "step() called before initialize()."
            )
        if self._state is FollowerState.FINISHED:
            return None

        self._elapsed_s = float(elapsed_s)
        if self._elapsed_s >= self.trajectory.total_time_s:
            self.end(interrupted=False)
            return None

        current_pose = self._pose_source()
        reference = self._sample_reference(self._elapsed_s)
        speeds = self.controller.calculate(current_pose, reference)
        command = self._output.emit(speeds)

        sample = FollowerSample(
            time_s=self._elapsed_s,
            target_pose=reference.pose,
            measured_pose=current_pose,
            error=self.controller.last_error,
            chassis_command=speeds,
            wheel_command=command if isinstance(command, MecanumWheelSpeeds) else None,
        )
        self.last_sample = sample
        if self._sample_callback is not None:
            self._sample_callback(sample)
        logger.debug(
            "t=%.3f err=(%.3f, %.3f, %.3f)",
            self._elapsed_s,
            sample.error.x,
            sample.error.y,
            sample.error.heading_rad,
        )
        return speeds

    def is_finished(self) -> bool:
        if self._state is FollowerState.FINISHED:
            return True
        if self._state is FollowerState.INITIALIZED:
            return False
        return self._elapsed_s >= self.trajectory.total_time_s

    def end(self, interrupted: bool = False) -> None:
        """Stop the drivetrain once and mark the run finished."""
        if not self._stop_sent:
            self._output.stop()
            self._stop_sent = True
        if self._state is not FollowerState.FINISHED:
            if interrupted:
                logger.info("Trajectory following interrupted at %.2f s", self._elapsed_s)
            else:
                logger.info("Trajectory following finished at %.2f s", self._elapsed_s)
        self._state = FollowerState.FINISHED

    def _sample_reference(self, elapsed_s: float) -> TrajectoryState:
        reference = self.trajectory.sample(elapsed_s)
        if not isinstance(reference, TrajectoryState):
            raise InvalidTrajectorySample(
                f"Trajectory sample at {elapsed_s:.3f} s is a {type(reference).__name__}, "
                "not a TrajectoryState."
            )
        if not reference.is_finite():
            raise InvalidTrajectorySample(
                f"Trajectory sample at {elapsed_s:.3f} s contains non-finite values."
            )
        return reference
