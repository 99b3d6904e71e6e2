import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from .geometry import ChassisSpeeds, Pose2d
from .kinematics import MecanumWheelSpeeds


@dataclass(frozen=True)
class FollowerSample:
    """What the follower saw and commanded on one control step."""

    time_s: float
    target_pose: Pose2d
    measured_pose: Pose2d
    error: Pose2d
    chassis_command: ChassisSpeeds
    wheel_command: MecanumWheelSpeeds | None = None


class TelemetryLogger:
    """CSV logger for path-following samples; usable as a follower sample callback."""

    HEADERS = [
        "time_s",
        "ref_x",
        "ref_y",
        "ref_heading",
        "veh_x",
        "veh_y",
        "veh_heading",
        "err_x",
        "err_y",
        "err_heading",
        "cmd_vx",
        "cmd_vy",
        "cmd_omega",
        "wheel_fl",
        "wheel_fr",
        "wheel_rl",
        "wheel_rr",
    ]

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("w", newline="")
        self._writer = csv.writer(self._file)
        self._writer.writerow(self.HEADERS)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __call__(self, sample: FollowerSample) -> None:
        self.log(sample)

    def log(self, sample: FollowerSample) -> None:
        if sample.wheel_command is None:
            wheels = [float("nan")] * 4
        else:
            wheels = sample.wheel_command.as_array().tolist()

        row = [
            sample.time_s,
            sample.target_pose.x,
            sample.target_pose.y,
            sample.target_pose.heading_rad,
            sample.measured_pose.x,
            sample.measured_pose.y,
            sample.measured_pose.heading_rad,
            sample.error.x,
            sample.error.y,
            sample.error.heading_rad,
            *sample.chassis_command.as_array().tolist(),
            *wheels,
        ]
        self._writer.writerow(row)
        self._file.flush()
