from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable

import numpy as np

from holonomic_follower import (
    DriveMode,
    HolonomicAutoBuilder,
    HolonomicSimulator,
    MecanumDriveKinematics,
    PIDGains,
    SimulationStep,
    SimulatorConfig,
    TelemetryLogger,
    Trajectory,
)

DEFAULT_TRANSLATION_GAINS = PIDGains(kp=3.0, ki=0.0, kd=0.0)
DEFAULT_ROTATION_GAINS = PIDGains(kp=2.5, ki=0.0, kd=0.0)
DEFAULT_MAX_WHEEL_SPEED_M_S = 4.0


def analyze_history(history: Iterable[SimulationStep], trajectory: Trajectory) -> float:
    history = list(history)
    if not history:
        print("No simulation history recorded.")
        return float("nan")

    position_errors: list[float] = []
    for step in history:
        ref = trajectory.sample(step.time_s).pose
        position_errors.append(float(np.linalg.norm(step.pose.position - ref.position)))

    rms_error = math.sqrt(float(np.mean(np.square(position_errors))))
    max_error = float(np.max(position_errors))
    final_pose = history[-1].pose
    final_ref = trajectory.sample(trajectory.total_time_s).pose

    print(f"Simulated {len(history)} steps over {history[-1].time_s:.2f} s.")
    print(
        f"Final pose: x={final_pose.x:.3f} y={final_pose.y:.3f} "
        f"heading={math.degrees(final_pose.heading_rad):.1f} deg"
    )
    print(
        f"Final reference: x={final_ref.x:.3f} y={final_ref.y:.3f} "
        f"heading={math.degrees(final_ref.heading_rad):.1f} deg"
    )
    print(f"RMS position error: {rms_error:.3f} m")
    print(f"Max position error: {max_error:.3f} m")
    return rms_error


def run_follower_example(
    trajectory: Trajectory,
    log_path: Path,
    *,
    drive_mode: DriveMode = DriveMode.WHEEL_OUTPUT,
    simulator_config: SimulatorConfig | None = None,
    translation_gains: PIDGains = DEFAULT_TRANSLATION_GAINS,
    rotation_gains: PIDGains = DEFAULT_ROTATION_GAINS,
    max_wheel_speed_m_s: float = DEFAULT_MAX_WHEEL_SPEED_M_S,
) -> list[SimulationStep]:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    kinematics = MecanumDriveKinematics.rectangular(wheelbase_m=0.5, track_width_m=0.55)
    simulator = HolonomicSimulator(simulator_config, kinematics=kinematics)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    history: list[SimulationStep] = []
    with TelemetryLogger(log_path) as logger:
        if drive_mode is DriveMode.WHEEL_OUTPUT:
            builder = HolonomicAutoBuilder(
                simulator.get_pose,
                translation_gains,
                rotation_gains,
                kinematics=kinematics,
                max_wheel_speed=max_wheel_speed_m_s,
                output_wheel_speeds=simulator.set_wheel_speeds,
                reset_pose=simulator.reset,
                clock=lambda: simulator.time_s,
                sample_callback=logger,
            )
        else:
            builder = HolonomicAutoBuilder(
                simulator.get_pose,
                translation_gains,
                rotation_gains,
                output_chassis_speeds=simulator.set_chassis_speeds,
                reset_pose=simulator.reset,
                clock=lambda: simulator.time_s,
                sample_callback=logger,
            )

        builder.reset_pose_to(trajectory)
        follower = builder.follow_trajectory(trajectory)
        follower.initialize()
        while not follower.is_finished():
            follower.execute()
            history.append(simulator.step())
        follower.end(interrupted=False)

    analyze_history(history, trajectory)
    print(f"Telemetry log written to: {log_path}")
    return history
