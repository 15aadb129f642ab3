from __future__ import annotations

from typing import Sequence

from ..core.car import Car
from ..types.metrics import FrameMetrics


def create_metrics(frame: int, dt: float, cars: Sequence[Car], duration_ms: float) -> FrameMetrics:
    count = len(cars)
    if count == 0:
        return FrameMetrics(frame, dt, 0, 0.0, 0.0, 0.0, duration_ms)
    speeds = [car.speed for car in cars]
    steering_sum = sum(car.last_steering.size for car in cars)
    return FrameMetrics(
        frame=frame,
        dt=dt,
        cars=count,
        average_speed=sum(speeds) / count,
        max_speed=max(speeds),
        average_steering=steering_sum / count,
        frame_duration_ms=duration_ms,
    )
