from __future__ import annotations

import copy
import logging
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence

from ...rng import DeterministicRng
from ..systems.behaviors import build_behavior
from ..systems.metrics import create_metrics
from ..types.metrics import FrameMetrics
from ..types.snapshot import Snapshot, SnapshotArena, SnapshotMetadata
from .car import Car
from .config import NEIGHBOR_MODES, CarConfig, SimulationConfig
from .vector import Vector2
from .world import World

logger = logging.getLogger(__name__)


class Simulation:
    """Frame driver: owns the roster and pointer state and updates every car once per frame.

    In ``"live"`` neighbor mode each car's :class:`World` aliases the roster, so
    cars updated later in a frame see the new state of cars updated before them.
    ``"snapshot"`` mode shows every car the roster as it was at the start of the
    frame instead, which changes behaviour and is only used when asked for.

    An explicit ``cars`` roster is copied at construction; :meth:`reset` replaces
    the roster with fresh copies of those initial cars.
    """

    def __init__(self, config: SimulationConfig, cars: Optional[Sequence[Car]] = None):
        if config.neighbor_mode not in NEIGHBOR_MODES:
            raise ValueError(f"Unknown neighbor mode: {config.neighbor_mode}")
        self._config = config
        self._rng = DeterministicRng(config.seed)
        self._width = config.width
        self._height = config.height
        self._mouse_pos: Optional[Vector2] = None
        self._click_pos: Optional[Vector2] = None
        self._frame = 0
        self._metrics: Optional[FrameMetrics] = None
        # Pristine copy of an explicit roster, restored by reset().
        self._initial_roster = copy.deepcopy(list(cars)) if cars is not None else None
        self._cars: List[Car] = list(cars) if cars is not None else []
        if cars is None:
            self._bootstrap_cars()

    @property
    def cars(self) -> List[Car]:
        return self._cars

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def metrics(self) -> FrameMetrics | None:
        return self._metrics

    @property
    def rng(self) -> DeterministicRng:
        return self._rng

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def mouse_pos(self) -> Optional[Vector2]:
        return self._mouse_pos

    @property
    def click_pos(self) -> Optional[Vector2]:
        return self._click_pos

    def reset(self) -> None:
        self._rng.reset()
        self._width = self._config.width
        self._height = self._config.height
        self._mouse_pos = None
        self._click_pos = None
        self._frame = 0
        self._metrics = None
        self._bootstrap_cars()
        logger.info("Simulation reset (seed=%s, cars=%d)", self._config.seed, len(self._cars))

    def move_pointer(self, position: Vector2) -> None:
        self._mouse_pos = position

    def click(self, position: Vector2) -> None:
        self._click_pos = position

    def resize_arena(self, width: float, height: float) -> None:
        self._width = float(width)
        self._height = float(height)

    def screen_to_arena(self, x: float, y: float) -> Vector2:
        """Convert canvas pixel coordinates to arena coordinates centred on the origin."""
        return Vector2(x - self._width / 2.0, y - self._height / 2.0)

    def clamp_dt(self, elapsed: float) -> float:
        return max(0.0, min(float(elapsed), self._config.max_dt))

    def step(self, elapsed: float) -> FrameMetrics:
        start = perf_counter()
        dt = self.clamp_dt(elapsed)
        if dt != elapsed:
            logger.debug("Frame %d: elapsed %.4fs clamped to %.4fs", self._frame, elapsed, dt)

        cars = self._cars
        frozen = [car.clone() for car in cars] if self._config.neighbor_mode == "snapshot" else None
        for index, car in enumerate(cars):
            if frozen is None:
                actors: Sequence[Car] = cars
            else:
                actors = frozen[:index] + [car] + frozen[index + 1 :]
            car.update(
                World(
                    dt=dt,
                    width=self._width,
                    height=self._height,
                    mouse_pos=self._mouse_pos,
                    click_pos=self._click_pos,
                    current=car,
                    actors=actors,
                )
            )

        elapsed_ms = (perf_counter() - start) * 1000.0
        self._metrics = create_metrics(self._frame, dt, cars, elapsed_ms)
        self._frame += 1
        return self._metrics

    def snapshot(self) -> Snapshot:
        return Snapshot(
            frame=self._frame,
            metrics=self._metrics,
            cars=[self._car_snapshot(index, car) for index, car in enumerate(self._cars)],
            arena=SnapshotArena(
                width=self._width,
                height=self._height,
                mouse=None if self._mouse_pos is None else (self._mouse_pos.x, self._mouse_pos.y),
                click=None if self._click_pos is None else (self._click_pos.x, self._click_pos.y),
            ),
            metadata=SnapshotMetadata(
                max_dt=self._config.max_dt,
                seed=self._config.seed,
                neighbor_mode=self._config.neighbor_mode,
                config_version=self._config.config_version,
            ),
        )

    def _car_snapshot(self, index: int, car: Car) -> Dict[str, Any]:
        return {
            "name": car.name if car.name is not None else f"car-{index}",
            "x": car.position.x,
            "y": car.position.y,
            "vx": car.velocity.x,
            "vy": car.velocity.y,
            "heading": car.velocity.angle,
            "speed": car.speed,
            "steering_x": car.last_steering.x,
            "steering_y": car.last_steering.y,
        }

    def _bootstrap_cars(self) -> None:
        if self._initial_roster is not None:
            self._cars = copy.deepcopy(self._initial_roster)
            return
        self._cars = [self._build_car(car_config) for car_config in self._config.cars]
        logger.info("Built %d cars", len(self._cars))

    def _build_car(self, car_config: CarConfig) -> Car:
        behavior = build_behavior(car_config.kind, car_config.params, self._rng)
        if car_config.position is None:
            position = self._rng.random_position(self._width, self._height)
        else:
            position = Vector2(*car_config.position)
        orientation = self._rng.random_angle() if car_config.orientation is None else car_config.orientation
        logger.debug("Spawning %s car %r at %s", car_config.kind, car_config.name, position)
        return Car(
            behavior=behavior,
            position=position,
            orientation=orientation,
            mass=car_config.mass,
            max_force=car_config.max_force,
            max_speed=car_config.max_speed,
            name=car_config.name,
        )
