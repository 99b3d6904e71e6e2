from __future__ import annotations

from .config import PIDGains
from .geometry import ChassisSpeeds, Pose2d
from .pid import PIDController
from .trajectory import TrajectoryState


class HolonomicDriveController:
    """Feed-forward plus PID correction on x, y and heading.

    The x and y controllers are built from the same translation gains but keep
    separate state. Heading error is taken along the shortest arc.
    """

    def __init__(self, translation: PIDGains, rotation: PIDGains):
        self.translation_gains = translation
        self.rotation_gains = rotation
        self.x_controller = PIDController(translation)
        self.y_controller = PIDController(translation)
        self.rotation_controller = PIDController(rotation, continuous=True)
        self.last_error = Pose2d()

    def reset(self) -> None:
        self.x_controller.reset()
        self.y_controller.reset()
        self.rotation_controller.reset()
        self.last_error = Pose2d()

    @property
    def at_reference(self) -> bool:
        return (
            self.x_controller.at_setpoint
            and self.y_controller.at_setpoint
            and self.rotation_controller.at_setpoint
        )

    def calculate(self, current_pose: Pose2d, reference: TrajectoryState) -> ChassisSpeeds:
        """Return robot-relative chassis speeds driving ``current_pose`` onto ``reference``."""
        target = reference.pose
        feedforward = reference.velocity
        self.last_error = current_pose.error_to(target)

        x_feedback = self.x_controller.calculate(current_pose.x, target.x)
        y_feedback = self.y_controller.calculate(current_pose.y, target.y)
        rotation_feedback = self.rotation_controller.calculate(
            current_pose.heading_rad, target.heading_rad
        )

        return ChassisSpeeds.from_field_relative(
            feedforward.vx + x_feedback,
            feedforward.vy + y_feedback,
            feedforward.omega + rotation_feedback,
            current_pose.heading_rad,
        )
