import math
from collections.abc import Callable

import numpy as np
import pytest

from examples import Trajectory, line_trajectory, run_follower_example
from holonomic_follower import DriveMode, Pose2d, wrap_angle


TrajectoryFactory = Callable[[], Trajectory]


def _trajectory_cases() -> list[tuple[str, TrajectoryFactory, DriveMode]]:
    return [
        (
            "line-chassis",
            lambda: line_trajectory(speed_m_s=1.5, direction_rad=0.3, duration_s=4.0),
            DriveMode.CHASSIS_OUTPUT,
        ),
        (
            "strafe-turn-wheels",
            lambda: line_trajectory(
                speed_m_s=1.0,
                direction_rad=math.pi / 2.0,
                duration_s=5.0,
                end_heading_rad=math.radians(170.0),
            ),
            DriveMode.WHEEL_OUTPUT,
        ),
        (
            "offset-start-wheels",
            lambda: line_trajectory(
                speed_m_s=2.0,
                direction_rad=-0.5,
                duration_s=3.0,
                start_pose=Pose2d(1.0, -2.0, -2.5),
                end_heading_rad=2.5,
            ),
            DriveMode.WHEEL_OUTPUT,
        ),
    ]


@pytest.mark.parametrize(
    ("name", "trajectory_factory", "drive_mode"),
    _trajectory_cases(),
)
def test_examples_track_reference(
    name: str, trajectory_factory: TrajectoryFactory, drive_mode: DriveMode, tmp_path
) -> None:
    trajectory = trajectory_factory()
    log_path = tmp_path / f"sim_{name}.csv"
    history = run_follower_example(
        trajectory=trajectory,
        log_path=log_path,
        drive_mode=drive_mode,
    )

    assert history, f"{name} example produced no simulation steps"
    assert log_path.exists() and log_path.stat().st_size > 0, f"{name} log was not written"
    assert history[-1].time_s >= trajectory.total_time_s

    pos_errors: list[float] = []
    yaw_errors: list[float] = []
    for step in history:
        ref = trajectory.sample(step.time_s).pose
        pos_errors.append(float(np.linalg.norm(step.pose.position - ref.position)))
        yaw_errors.append(abs(wrap_angle(step.pose.heading_rad - ref.heading_rad)))

    pos_rms = float(np.sqrt(np.mean(np.square(pos_errors))))
    yaw_max = float(np.max(yaw_errors))

    # Allow reasonable tracking error margins while still flagging regressions.
    assert pos_rms < 0.15, f"{name} position RMS too high: {pos_rms:.3f} m"
    assert max(pos_errors) < 0.3, f"{name} position max too high: {max(pos_errors):.3f} m"
    assert yaw_max < math.radians(10.0), f"{name} yaw max too high: {math.degrees(yaw_max):.2f} deg"


def test_wheel_example_stops_drivetrain(tmp_path) -> None:
    trajectory = line_trajectory(speed_m_s=1.0, duration_s=1.0)
    history = run_follower_example(
        trajectory=trajectory,
        log_path=tmp_path / "stop.csv",
        drive_mode=DriveMode.WHEEL_OUTPUT,
    )
    # The last latched command is the terminal stop.
    assert np.allclose(history[-1].command.as_array(), 0.0, atol=1e-12)
