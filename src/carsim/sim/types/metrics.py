from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class FrameMetrics:
    frame: int
    dt: float
    cars: int
    average_speed: float
    max_speed: float
    average_steering: float
    frame_duration_ms: float = 0.0
