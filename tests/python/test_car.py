from __future__ import annotations

import math

import pytest
from pytest import approx

from carsim.sim.core.car import Car, distance_between
from carsim.sim.core.vector import ZERO, Vector2
from carsim.sim.core.world import World
from carsim.sim.systems.behaviors import Idle


class _Constant:
    def __init__(self, force: Vector2):
        self.force = force
        self.calls = 0

    def calculate_steering(self, car, world):
        self.calls += 1
        return self.force


def _world(car: Car, dt: float = 0.1, width: float = 1024.0, height: float = 768.0, actors=None) -> World:
    return World(
        dt=dt,
        width=width,
        height=height,
        mouse_pos=None,
        click_pos=None,
        current=car,
        actors=actors if actors is not None else [car],
    )


def test_initial_velocity_follows_orientation():
    car = Car(Idle(), position=Vector2(5.0, 6.0), orientation=math.pi / 2)
    assert car.position == Vector2(5.0, 6.0)
    assert car.velocity == Vector2(0.0, 1.0)
    assert car.direction == Vector2(0.0, 1.0)
    assert car.speed == approx(1.0)
    assert car.last_steering == ZERO


@pytest.mark.parametrize("field", ["mass", "max_force", "max_speed"])
def test_non_positive_parameters_are_rejected(field):
    with pytest.raises(ValueError):
        Car(Idle(), **{field: 0.0})


def test_kinematic_state_is_read_only():
    car = Car(Idle())
    with pytest.raises(AttributeError):
        car.position = Vector2(1.0, 1.0)  # type: ignore[misc]
    with pytest.raises(AttributeError):
        car.velocity = Vector2(1.0, 1.0)  # type: ignore[misc]


def test_update_without_force_coasts():
    car = Car(Idle())
    car.update(_world(car, dt=0.1))
    assert car.velocity == Vector2(1.0, 0.0)
    assert car.position == Vector2(0.1, 0.0)


def test_update_clamps_force_and_integrates():
    behavior = _Constant(Vector2(10_000.0, 0.0))
    car = Car(behavior)
    car.update(_world(car, dt=0.1))

    assert behavior.calls == 1
    assert car.last_steering == Vector2(350.0, 0.0)
    assert car.velocity == Vector2(36.0, 0.0)
    assert car.position == Vector2(3.6, 0.0)


def test_update_divides_by_mass():
    car = Car(_Constant(Vector2(0.0, 100.0)), orientation=math.pi / 2, mass=2.0)
    car.update(_world(car, dt=0.1))
    assert car.velocity == Vector2(0.0, 6.0)


def test_update_caps_speed():
    car = Car(_Constant(Vector2(350.0, 0.0)), max_speed=10.0)
    for _ in range(5):
        car.update(_world(car, dt=0.1))
        assert car.speed <= 10.0 + 1e-12
    assert car.velocity == Vector2(10.0, 0.0)


def test_zero_dt_keeps_state():
    car = Car(_Constant(Vector2(100.0, 100.0)), position=Vector2(3.0, 4.0))
    car.update(_world(car, dt=0.0))
    assert car.position == Vector2(3.0, 4.0)
    assert car.velocity == Vector2(1.0, 0.0)
    assert car.last_steering == Vector2(100.0, 100.0)


def test_direction_of_stopped_car_points_along_x():
    car = Car(_Constant(Vector2(-10.0, 0.0)))
    car.update(_world(car, dt=0.1))
    assert car.velocity.is_zero
    assert car.direction == Vector2(1.0, 0.0)


def test_wraps_past_right_edge_to_left_bound():
    car = Car(Idle(), position=Vector2(120.95, 0.0))
    car.update(_world(car, dt=0.1, width=200.0, height=200.0))
    assert car.position.x == -100.0


def test_wraps_past_left_edge_to_right_bound():
    car = Car(Idle(), position=Vector2(-120.95, 0.0), orientation=math.pi)
    car.update(_world(car, dt=0.1, width=200.0, height=200.0))
    assert car.position.x == 100.0


def test_wraps_vertically():
    car = Car(Idle(), position=Vector2(0.0, 70.95), orientation=math.pi / 2)
    car.update(_world(car, dt=0.1, width=200.0, height=100.0))
    assert car.position.y == -50.0

    car = Car(Idle(), position=Vector2(0.0, -70.95), orientation=-math.pi / 2)
    car.update(_world(car, dt=0.1, width=200.0, height=100.0))
    assert car.position.y == 50.0


def test_no_wrap_inside_margin():
    car = Car(Idle(), position=Vector2(119.0, 0.0))
    car.update(_world(car, dt=0.1, width=200.0, height=200.0))
    assert car.position.x == approx(119.1)


def test_clone_is_independent():
    car = Car(_Constant(Vector2(50.0, 0.0)), name="a")
    twin = car.clone()
    twin.update(_world(twin))
    assert car.position == ZERO
    assert twin.position != ZERO
    assert twin.name == "a"


def test_distance_between_cars():
    a = Car(Idle(), position=Vector2(1.0, 1.0))
    b = Car(Idle(), position=Vector2(4.0, 5.0))
    assert distance_between(a, b) == approx(5.0)
    assert distance_between(b, a) == approx(5.0)
