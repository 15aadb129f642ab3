from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..logging_setup import setup_logging
from ..sim.core.config import NEIGHBOR_MODES, SimulationConfig
from ..sim.core.simulation import Simulation
from ..sim.core.vector import Vector2
from ..sim.types.metrics import FrameMetrics

logger = logging.getLogger(__name__)

_BASIC_HEADER = [
    "frame",
    "cars",
    "avg_speed",
    "max_speed",
    "avg_steering",
    "frame_ms",
]

_DETAILED_HEADER = [
    "frame",
    "car",
    "x",
    "y",
    "vx",
    "vy",
    "speed",
    "steering",
]


def _format_basic_row(metrics: FrameMetrics, frame_ms: float) -> list[object]:
    return [
        metrics.frame,
        metrics.cars,
        f"{metrics.average_speed:.4f}",
        f"{metrics.max_speed:.4f}",
        f"{metrics.average_steering:.4f}",
        f"{frame_ms:.3f}",
    ]


def _format_detailed_rows(simulation: Simulation, frame: int) -> list[list[object]]:
    rows = []
    for index, car in enumerate(simulation.cars):
        rows.append(
            [
                frame,
                car.name if car.name is not None else f"car-{index}",
                f"{car.position.x:.4f}",
                f"{car.position.y:.4f}",
                f"{car.velocity.x:.4f}",
                f"{car.velocity.y:.4f}",
                f"{car.speed:.4f}",
                f"{car.last_steering.size:.4f}",
            ]
        )
    return rows


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    frames: int,
    seed: Optional[int] = None,
    log_path: Optional[Path] = None,
    deterministic_log: bool = False,
    log_format: str = "detailed",
    summary_path: Optional[Path] = None,
    config_path: Optional[Path] = None,
    dt: Optional[float] = None,
    click: Optional[tuple[float, float]] = None,
    mouse: Optional[tuple[float, float]] = None,
    neighbor_mode: Optional[str] = None,
) -> Simulation:
    if frames < 0:
        raise ValueError(f"frames must be non-negative, got {frames}")
    log_mode = log_format.lower().strip()
    if log_mode not in {"basic", "detailed"}:
        raise ValueError(f"Unknown log format: {log_format}")

    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    if neighbor_mode is not None:
        config.neighbor_mode = neighbor_mode
    simulation = Simulation(config)
    if mouse is not None:
        simulation.move_pointer(Vector2(*mouse))
    if click is not None:
        simulation.click(Vector2(*click))
    frame_dt = config.time_step if dt is None else dt
    logger.info("Running %d frames (seed=%s, dt=%.4f, cars=%d)", frames, config.seed, frame_dt, len(simulation.cars))

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_DETAILED_HEADER if log_mode == "detailed" else _BASIC_HEADER)

    speed_series: list[float] = []
    steering_series: list[float] = []
    frame_ms_series: list[float] = []

    try:
        for frame in range(frames):
            metrics = simulation.step(frame_dt)
            frame_ms = 0.0 if deterministic_log else metrics.frame_duration_ms
            speed_series.append(metrics.average_speed)
            steering_series.append(metrics.average_steering)
            frame_ms_series.append(frame_ms)

            if writer:
                if log_mode == "detailed":
                    writer.writerows(_format_detailed_rows(simulation, frame))
                else:
                    writer.writerow(_format_basic_row(metrics, frame_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        summary = {
            "frames": frames,
            "seed": config.seed,
            "dt": frame_dt,
            "neighbor_mode": config.neighbor_mode,
            "log_format": log_mode,
            "deterministic_log": deterministic_log,
            "cars": simulation.snapshot().cars,
            "avg_speed": _summary_stats(speed_series),
            "avg_steering": _summary_stats(steering_series),
            "frame_ms": _summary_stats(frame_ms_series),
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
        logger.info("Wrote summary to %s", summary_path)
    return simulation


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless steering cars simulation")
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML simulation config")
    parser.add_argument("--dt", type=float, default=None, help="Seconds per frame (clamped to max_dt)")
    parser.add_argument("--click", type=float, nargs=2, metavar=("X", "Y"), default=None)
    parser.add_argument("--mouse", type=float, nargs=2, metavar=("X", "Y"), default=None)
    parser.add_argument("--neighbor-mode", choices=list(NEIGHBOR_MODES), default=None)
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-frame data")
    parser.add_argument(
        "--log-format",
        choices=["basic", "detailed"],
        default="detailed",
        help="basic writes one metrics row per frame, detailed one row per car per frame.",
    )
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file to write summary stats.")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Force frame_ms to 0.000 so identical seeds produce identical files.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every frame at DEBUG level.")
    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_headless(
        args.frames,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        log_format=args.log_format,
        summary_path=args.summary,
        config_path=args.config,
        dt=args.dt,
        click=tuple(args.click) if args.click else None,
        mouse=tuple(args.mouse) if args.mouse else None,
        neighbor_mode=args.neighbor_mode,
    )


if __name__ == "__main__":
    main()
