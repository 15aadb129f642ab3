from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

NEIGHBOR_MODES = ("live", "snapshot")


@dataclass
class CarConfig:
    kind: str = "idle"
    name: Optional[str] = None
    position: Optional[tuple[float, float]] = None
    orientation: Optional[float] = None
    mass: float = 1.0
    max_force: float = 350.0
    max_speed: float = 500.0
    params: Dict[str, Any] = field(default_factory=dict)


def _default_cars() -> List[CarConfig]:
    return [
        CarConfig(kind="wander", name="wanderer", params={"speed": 300.0}),
        CarConfig(kind="seek", name="seeker", params={"source": "click"}),
        CarConfig(kind="pursue", name="hunter", max_speed=400.0, params={"target": "wanderer"}),
    ]


@dataclass
class SimulationConfig:
    width: float = 1024.0
    height: float = 768.0
    # Longer frame times are clamped to this.
    max_dt: float = 0.1
    time_step: float = 1.0 / 60.0
    seed: int = 42
    neighbor_mode: str = "live"
    config_version: str = "v1"
    cars: List[CarConfig] = field(default_factory=_default_cars)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        logger.info("Loaded simulation config from %s", path)
        return load_config(data)


def _pair(value: Any) -> Optional[tuple[float, float]]:
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return (float(value[0]), float(value[1]))
    if value is None:
        return None
    raise ValueError(f"Expected an [x, y] pair, got {value!r}")


def load_car_config(raw: Dict[str, Any]) -> CarConfig:
    values = dict(raw)
    position = _pair(values.pop("position", None))
    params = values.pop("params", None) or {}
    if not isinstance(params, dict):
        raise ValueError(f"Expected a mapping of behavior params, got {params!r}")
    return CarConfig(position=position, params=params, **values)


def load_config(raw: Dict[str, Any]) -> SimulationConfig:
    sim_values = {k: v for k, v in raw.items() if k != "cars"}
    if "cars" in raw:
        sim_values["cars"] = [load_car_config(car) for car in raw["cars"] or []]
    config = SimulationConfig(**sim_values)
    if config.neighbor_mode not in NEIGHBOR_MODES:
        raise ValueError(f"Unknown neighbor mode: {config.neighbor_mode}")
    return config
