from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from ..core.vector import ZERO, Vector2
from .steering import Wander, arrive, flee, pursuit, seek

if TYPE_CHECKING:
    from ..core.car import Car, SteeringBehavior
    from ..core.world import World
    from ...rng import DeterministicRng

POINTER_SOURCES = ("click", "mouse")


def _pointer(world: World, source: str) -> Optional[Vector2]:
    return world.click_pos if source == "click" else world.mouse_pos


def _check_source(source: str) -> str:
    if source not in POINTER_SOURCES:
        raise ValueError(f"Unknown pointer source: {source}")
    return source


class Idle:
    def calculate_steering(self, car: Car, world: World) -> Vector2:
        return ZERO


class SeekPointer:
    def __init__(self, source: str = "click", speed: Optional[float] = None) -> None:
        self.source = _check_source(source)
        self.speed = speed

    def calculate_steering(self, car: Car, world: World) -> Vector2:
        target = _pointer(world, self.source)
        if target is None:
            return ZERO
        return seek(car, target, self.speed)


class FleePointer:
    def __init__(
        self,
        source: str = "mouse",
        panic_distance: float = math.inf,
        speed: Optional[float] = None,
    ) -> None:
        self.source = _check_source(source)
        self.panic_distance = panic_distance
        self.speed = speed

    def calculate_steering(self, car: Car, world: World) -> Vector2:
        target = _pointer(world, self.source)
        if target is None:
            return ZERO
        return flee(car, target, self.panic_distance, self.speed)


class ArrivePointer:
    def __init__(self, source: str = "click", deceleration: float = 1.0, stop_distance: float = 5.0) -> None:
        self.source = _check_source(source)
        self.deceleration = deceleration
        self.stop_distance = stop_distance

    def calculate_steering(self, car: Car, world: World) -> Vector2:
        target = _pointer(world, self.source)
        if target is None:
            return ZERO
        return arrive(car, target, self.deceleration, self.stop_distance)


class Wanderer:
    """Wander strategy; the :class:`Wander` state is created for the first car that asks."""

    def __init__(
        self,
        rng: DeterministicRng,
        distance: float = 120.0,
        radius: float = 90.0,
        jitter: float = 15.0,
        speed: Optional[float] = 300.0,
    ) -> None:
        self._rng = rng
        self.distance = distance
        self.radius = radius
        self.jitter = jitter
        self.speed = speed
        self._wander: Optional[Wander] = None

    @property
    def wander(self) -> Optional[Wander]:
        return self._wander

    def calculate_steering(self, car: Car, world: World) -> Vector2:
        if self._wander is None:
            self._wander = Wander(car, self._rng, self.distance, self.radius, self.jitter, self.speed)
        elif self._wander.car is not car:
            raise ValueError("Wanderer is already bound to another car")
        return self._wander.force()


class Pursue:
    def __init__(self, target: str) -> None:
        self.target = target

    def calculate_steering(self, car: Car, world: World) -> Vector2:
        for other in world.neighbors():
            if other.name == self.target:
                return pursuit(car, other)
        return ZERO


BehaviorFactory = Callable[[Mapping[str, Any], "DeterministicRng"], "SteeringBehavior"]

_REGISTRY: Dict[str, BehaviorFactory] = {
    "idle": lambda params, rng: Idle(**params),
    "seek": lambda params, rng: SeekPointer(**params),
    "flee": lambda params, rng: FleePointer(**params),
    "arrive": lambda params, rng: ArrivePointer(**params),
    "wander": lambda params, rng: Wanderer(rng, **params),
    "pursue": lambda params, rng: Pursue(**params),
}


def behavior_kinds() -> list[str]:
    return sorted(_REGISTRY)


def build_behavior(kind: str, params: Mapping[str, Any], rng: DeterministicRng) -> SteeringBehavior:
    factory = _REGISTRY.get(kind)
    if factory is None:
        raise ValueError(f"Unknown behavior kind: {kind}")
    return factory(dict(params), rng)
