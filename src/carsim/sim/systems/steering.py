"""Steering behaviors.

Every function returns a steering force; :meth:`Car.update` clamps it to the
car's ``max_force`` and integrates it. Only :class:`Wander` keeps state
between frames.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from ..core.vector import ZERO, Vector2, resize

if TYPE_CHECKING:
    from ..core.car import Car
    from ...rng import DeterministicRng

# Compared against a dot product of unit directions.
FACING_THRESHOLD = math.acos(math.radians(18.0))


def seek(car: Car, target: Vector2, speed: Optional[float] = None) -> Vector2:
    """Head for ``target`` at ``speed`` (the car's max speed by default)."""
    if speed is None:
        speed = car.max_speed
    desired_velocity = resize(target - car.position, speed)
    return desired_velocity - car.velocity


def flee(
    car: Car,
    target: Vector2,
    panic_distance: float = math.inf,
    speed: Optional[float] = None,
) -> Vector2:
    """Run directly away from ``target``.

    No force is produced when the desired velocity is longer than ``panic_distance``.
    A zero ``speed`` asks for a standstill, so the result only cancels the current velocity.
    """
    if speed is None:
        speed = car.max_speed
    desired_velocity = resize(car.position - target, speed)
    size = desired_velocity.size
    if size > panic_distance:
        return ZERO
    if size == 0.0:
        return -car.velocity

    desired_velocity = desired_velocity * (car.max_force / size)
    return desired_velocity - car.velocity


def arrive(
    car: Car,
    target: Vector2,
    deceleration: float = 1.0,
    stop_distance: float = 5.0,
) -> Vector2:
    """Slow down while approaching ``target`` and stop within ``stop_distance``."""
    to_target = target - car.position
    dist = to_target.size
    if dist < stop_distance or dist == 0.0:
        return ZERO

    # Zero deceleration means no slowing down at all.
    speed = min(dist / deceleration if deceleration else math.inf, car.max_speed)
    # Scales the target point itself rather than the offset to it.
    desired_velocity = target * (speed / dist)
    return desired_velocity - car.velocity


def pursuit(pursuer: Car, evader: Car) -> Vector2:
    """Intercept ``evader`` by seeking where it is going to be.

    The look-ahead time is ``|to_evader| / (pursuer.max_speed * evader.speed)``.
    That ratio is undefined for an evader with zero speed; such an evader is
    seeked at its current position instead of an extrapolated one.
    """
    to_evader = evader.position - pursuer.position

    is_ahead = to_evader.dot(pursuer.direction) > 0
    is_facing = pursuer.direction.dot(evader.direction) < FACING_THRESHOLD
    if is_ahead and is_facing:
        return seek(pursuer, evader.position)

    evader_speed = evader.speed
    if evader_speed == 0.0:
        # A stopped evader stays where it is.
        return seek(pursuer, evader.position)
    look_ahead_time = to_evader.size / (pursuer.max_speed * evader_speed)
    future_position = evader.position + evader.velocity * look_ahead_time
    return seek(pursuer, future_position)


class Wander:
    """Seeks a target that drifts randomly along a circle ahead of the car.

    Each call to :meth:`target` nudges ``angle`` by up to ``jitter`` degrees
    either way; the nudges accumulate for the lifetime of the instance.
    """

    def __init__(
        self,
        car: Car,
        rng: DeterministicRng,
        distance: float = 120.0,
        radius: float = 90.0,
        jitter: float = 15.0,
        speed: Optional[float] = 300.0,
    ) -> None:
        self._car = car
        self._rng = rng
        self.distance = distance
        self.radius = abs(radius)
        self.jitter = abs(jitter)
        self.speed = car.max_speed if speed is None else speed
        self.angle = rng.next_range(0.0, 2 * math.pi)

    @property
    def car(self) -> Car:
        return self._car

    def target(self) -> Vector2:
        self.angle += math.radians(self._rng.next_range(-self.jitter, self.jitter))

        circle_offset = self._car.direction * self.distance
        target_on_circle = Vector2.by_angle_size(self.angle, self.radius)
        return self._car.position + circle_offset + target_on_circle

    def force(self) -> Vector2:
        return seek(self._car, self.target(), self.speed)
