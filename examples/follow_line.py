from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from examples import line_trajectory, run_follower_example
from holonomic_follower import DriveMode

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"
LOG_FILE = LOG_DIR / "sim_follower_line.csv"


def main() -> None:
    trajectory = line_trajectory(speed_m_s=1.5, direction_rad=0.3, duration_s=4.0)

    run_follower_example(
        trajectory=trajectory,
        log_path=LOG_FILE,
        drive_mode=DriveMode.CHASSIS_OUTPUT,
    )


if __name__ == "__main__":
    main()
