#!/usr/bin/env python3
"""Plot core temperature and stores from a survival telemetry log.

Usage:
    python tools/plot_temperature.py
    python tools/plot_temperature.py --log logs/telemetry/survival_1700000000.jsonl --output run.png
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib

matplotlib.use("Agg")
from matplotlib import pyplot as plt  # noqa: E402

DEFAULT_LOG_DIR = Path("logs/telemetry")


def latest_log(directory: Path) -> Optional[Path]:
    logs = sorted(directory.glob("survival_*.jsonl"))
    return logs[-1] if logs else None


def load_samples(path: Path) -> List[Dict]:
    samples = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                samples.append(json.loads(line))
    return samples


def plot_samples(samples: List[Dict], output: Path) -> Path:
    minutes = [sample["minute"] / 60.0 for sample in samples]
    figure, (temp_axes, store_axes) = plt.subplots(2, 1, sharex=True, figsize=(9, 7))

    temp_axes.plot(minutes, [sample["temperature"] for sample in samples], color="tab:red", label="Core")
    temp_axes.plot(minutes, [sample["environment_temp"] for sample in samples], color="tab:blue", label="Ambient")
    for threshold, label in ((97.0, "Shivering"), (95.0, "Hypothermia"), (89.6, "Frostbite")):
        temp_axes.axhline(threshold, linestyle="--", linewidth=0.8, color="grey")
        temp_axes.annotate(label, (minutes[0], threshold), fontsize=7, color="grey")
    temp_axes.set_ylabel("Temperature (°F)")
    temp_axes.set_title("Core temperature")
    temp_axes.legend(loc="upper right")

    store_axes.plot(minutes, [sample["calories"] for sample in samples], label="Calories (kcal)")
    store_axes.plot(minutes, [sample["hydration"] for sample in samples], label="Hydration (ml)")
    store_axes.plot(minutes, [sample["energy"] for sample in samples], label="Energy (min)")
    store_axes.set_xlabel("Hours")
    store_axes.set_title("Survival stores")
    store_axes.legend(loc="upper right")

    figure.tight_layout()
    figure.savefig(output)
    plt.close(figure)
    return output


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Plot survival telemetry")
    parser.add_argument("--log", type=Path, help="Telemetry file (defaults to the newest survival log)")
    parser.add_argument("--output", type=Path, default=Path("survival_run.png"), help="Image to write")
    args = parser.parse_args(argv)

    log_path = args.log or latest_log(DEFAULT_LOG_DIR)
    if log_path is None:
        sys.stdout.write("No survival logs found\n")
        return 1
    samples = load_samples(log_path)
    if not samples:
        sys.stdout.write(f"{log_path} contains no samples\n")
        return 1
    written = plot_samples(samples, args.output)
    sys.stdout.write(f"Wrote {written}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
