from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from carsim.sim.core.car import Car
from carsim.sim.core.vector import Vector2
from carsim.sim.core.world import World
from carsim.sim.systems.behaviors import Idle


def _world(current: Car, actors, dt: float = 0.1) -> World:
    return World(
        dt=dt,
        width=800.0,
        height=600.0,
        mouse_pos=Vector2(1.0, 2.0),
        click_pos=None,
        current=current,
        actors=actors,
    )


def test_neighbors_exclude_only_the_current_car():
    a = Car(Idle(), position=Vector2(0.0, 0.0))
    twin = Car(Idle(), position=Vector2(0.0, 0.0))
    far = Car(Idle(), position=Vector2(300.0, 0.0))
    world = _world(a, [a, twin, far])

    neighbors = world.neighbors()
    assert len(neighbors) == 2
    assert neighbors[0] is twin
    assert neighbors[1] is far


def test_neighbors_within_radius():
    a = Car(Idle(), position=Vector2(0.0, 0.0))
    near = Car(Idle(), position=Vector2(30.0, 40.0))
    edge = Car(Idle(), position=Vector2(0.0, 100.0))
    far = Car(Idle(), position=Vector2(300.0, 0.0))
    world = _world(a, [a, near, edge, far])

    assert world.neighbors(50.0) == [near]
    assert world.neighbors(100.0) == [near, edge]
    assert world.neighbors(0.0) == []


def test_radius_is_measured_from_position_at_construction():
    a = Car(Idle(), position=Vector2(0.0, 0.0))
    other = Car(Idle(), position=Vector2(10.5, 0.0))
    world = _world(a, [a, other])

    a.update(_world(a, [a, other], dt=1.0))
    assert a.position == Vector2(1.0, 0.0)
    assert world.origin == Vector2(0.0, 0.0)
    assert world.neighbors(10.0) == []
    assert world.neighbors(10.5) == [other]


def test_actors_alias_the_roster():
    a = Car(Idle())
    roster = [a]
    world = _world(a, roster)
    late = Car(Idle(), position=Vector2(5.0, 5.0))
    roster.append(late)
    assert world.neighbors() == [late]


def test_world_is_frozen():
    a = Car(Idle())
    world = _world(a, [a])
    with pytest.raises(FrozenInstanceError):
        world.dt = 1.0  # type: ignore[misc]
