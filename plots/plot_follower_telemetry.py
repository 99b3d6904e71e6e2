from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

REQUIRED_COLUMNS = ("time_s", "ref_x", "veh_x", "cmd_vx")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Plot telemetry captured from the mecanum trajectory follower."
    )
    parser.add_argument("logfile", type=Path, help="Path to a follower CSV log")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Optional path to save the figure instead of displaying it.",
    )
    return parser


def plot_follower_telemetry(df: pd.DataFrame, output: Path | None) -> None:
    time = df["time_s"].to_numpy()

    fig, axes = plt.subplots(4, 1, figsize=(10, 13))

    axes[0].plot(df["ref_x"], df["ref_y"], linestyle="--", label="Reference")
    axes[0].plot(df["veh_x"], df["veh_y"], label="Robot")
    axes[0].set_xlabel("x (m)")
    axes[0].set_ylabel("y (m)")
    axes[0].set_aspect("equal", adjustable="datalim")
    axes[0].legend(loc="upper right", fontsize="small")
    axes[0].grid(True, linestyle=":")

    for comp, label in (("x", "X"), ("y", "Y")):
        axes[1].plot(time, df[f"err_{comp}"], label=f"{label} error (m)")
    axes[1].plot(
        time,
        np.rad2deg(df["err_heading"].to_numpy()),
        linestyle="--",
        label="Heading error (deg)",
    )
    axes[1].set_ylabel("Tracking error")
    axes[1].legend(loc="upper right", fontsize="small")
    axes[1].grid(True, linestyle=":")

    axes[2].plot(time, df["cmd_vx"], label="vx (m/s)")
    axes[2].plot(time, df["cmd_vy"], label="vy (m/s)")
    axes[2].plot(time, df["cmd_omega"], label="omega (rad/s)")
    axes[2].set_ylabel("Chassis command")
    axes[2].legend(loc="upper right", fontsize="small")
    axes[2].grid(True, linestyle=":")

    wheel_columns = ("wheel_fl", "wheel_fr", "wheel_rl", "wheel_rr")
    if all(col in df.columns for col in wheel_columns) and df["wheel_fl"].notna().any():
        for col in wheel_columns:
            axes[3].plot(time, df[col], label=col.removeprefix("wheel_").upper())
        axes[3].set_ylabel("Wheel speed (m/s)")
        axes[3].set_xlabel("Time (s)")
        axes[3].legend(loc="upper right", fontsize="small")
        axes[3].grid(True, linestyle=":")
    else:
        axes[3].text(
            0.5, 0.5, "chassis-speed output: no wheel commands", transform=axes[3].transAxes, ha="center"
        )
        axes[3].set_axis_off()

    axes[2].set_xlabel("Time (s)")

    fig.tight_layout()

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=200)
    else:
        plt.show()


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if not args.logfile.exists():
        raise SystemExit(f"Telemetry log not found: {args.logfile}")

    df = pd.read_csv(args.logfile)
    missing = [col for col in REQUIRED_COLUMNS if col not in df]
    if missing:
        raise SystemExit(f"Log is missing expected columns: {missing}")

    plot_follower_telemetry(df, args.output)


if __name__ == "__main__":
    main()
