from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Optional, Protocol

from .vector import ZERO, Vector2, distance, normalize, truncate

if TYPE_CHECKING:
    from .world import World

WRAP_MARGIN = 20.0


class SteeringBehavior(Protocol):
    def calculate_steering(self, car: "Car", world: "World") -> Vector2:
        ...


class Car:
    """A steerable vehicle.

    Kinematic state is only changed by :meth:`update`; everything else is read-only.
    The steering force comes from the ``behavior`` strategy the car is built with.
    """

    def __init__(
        self,
        behavior: SteeringBehavior,
        position: Vector2 = ZERO,
        orientation: float = 0.0,
        mass: float = 1.0,
        max_force: float = 350.0,
        max_speed: float = 500.0,
        name: Optional[str] = None,
    ) -> None:
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")
        if max_force <= 0:
            raise ValueError(f"max_force must be positive, got {max_force}")
        if max_speed <= 0:
            raise ValueError(f"max_speed must be positive, got {max_speed}")
        self._behavior = behavior
        self._position = position
        self._velocity = Vector2.by_angle(orientation)
        self._mass = float(mass)
        self._max_force = float(max_force)
        self._max_speed = float(max_speed)
        self._name = name
        self._last_steering = ZERO

    def __repr__(self) -> str:
        return f"Car(name={self._name!r}, position={self._position}, velocity={self._velocity})"

    @property
    def behavior(self) -> SteeringBehavior:
        return self._behavior

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def max_force(self) -> float:
        return self._max_force

    @property
    def max_speed(self) -> float:
        return self._max_speed

    @property
    def position(self) -> Vector2:
        return self._position

    @property
    def velocity(self) -> Vector2:
        return self._velocity

    @property
    def direction(self) -> Vector2:
        if self._velocity.is_zero:
            return Vector2.by_angle(0.0)
        return normalize(self._velocity)

    @property
    def speed(self) -> float:
        return self._velocity.size

    @property
    def last_steering(self) -> Vector2:
        return self._last_steering

    def calculate_steering(self, world: "World") -> Vector2:
        return self._behavior.calculate_steering(self, world)

    def update(self, world: "World") -> None:
        self._last_steering = truncate(self.calculate_steering(world), self._max_force)

        impulse = self._last_steering * world.dt
        acceleration = impulse / self._mass
        self._velocity = truncate(self._velocity + acceleration, self._max_speed)
        position = self._position + self._velocity * world.dt

        hw = world.width / 2.0
        if position.x < -(hw + WRAP_MARGIN):
            position = position.copy(x=hw)
        elif position.x > hw + WRAP_MARGIN:
            position = position.copy(x=-hw)

        hh = world.height / 2.0
        if position.y < -(hh + WRAP_MARGIN):
            position = position.copy(y=hh)
        elif position.y > hh + WRAP_MARGIN:
            position = position.copy(y=-hh)

        self._position = position

    def clone(self) -> "Car":
        return copy.copy(self)


def distance_between(car_a: Car, car_b: Car) -> float:
    return distance(car_a.position, car_b.position)
