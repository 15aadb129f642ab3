from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .metrics import FrameMetrics


@dataclass(slots=True)
class Snapshot:
    frame: int
    metrics: Optional[FrameMetrics]
    cars: List[Dict[str, Any]]
    arena: "SnapshotArena"
    metadata: "SnapshotMetadata"


@dataclass(slots=True)
class SnapshotArena:
    width: float
    height: float
    mouse: Optional[tuple[float, float]]
    click: Optional[tuple[float, float]]


@dataclass(slots=True)
class SnapshotMetadata:
    max_dt: float
    seed: int
    neighbor_mode: str
    config_version: str
