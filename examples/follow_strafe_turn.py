import math
from pathlib import Path

if __package__ in (None, ""):
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[1]))

from examples import line_trajectory, run_follower_example
from holonomic_follower import DriveMode

LOG_DIR = Path(__file__).resolve().parents[1] / "logs"
LOG_FILE = LOG_DIR / "sim_follower_strafe_turn.csv"


def main() -> None:
    # Strafe left while turning to face the opposite end of the field.
    trajectory = line_trajectory(
        speed_m_s=1.0,
        direction_rad=math.pi / 2.0,
        duration_s=5.0,
        end_heading_rad=math.radians(170.0),
    )

    run_follower_example(
        trajectory=trajectory,
        log_path=LOG_FILE,
        drive_mode=DriveMode.WHEEL_OUTPUT,
    )


if __name__ == "__main__":
    main()
