from __future__ import annotations

from pathlib import Path

import pytest

from carsim.sim.core.config import CarConfig, SimulationConfig, load_config
from carsim.sim.core.simulation import Simulation
from carsim.sim.core.vector import Vector2

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_load_config_overrides_defaults():
    config = load_config(
        {
            "width": 640,
            "seed": 5,
            "cars": [
                {"kind": "seek", "name": "a", "position": [1, 2], "orientation": 0.5, "params": {"source": "mouse"}},
                {"kind": "wander"},
            ],
        }
    )
    assert config.width == 640
    assert config.height == 768.0
    assert config.seed == 5
    assert config.max_dt == 0.1
    assert config.cars[0] == CarConfig(
        kind="seek", name="a", position=(1.0, 2.0), orientation=0.5, params={"source": "mouse"}
    )
    assert config.cars[1].position is None


def test_load_config_keeps_default_roster_when_cars_missing():
    assert [car.name for car in load_config({}).cars] == ["wanderer", "seeker", "hunter"]
    assert load_config({"cars": None}).cars == []


def test_invalid_values_are_rejected():
    with pytest.raises(ValueError):
        load_config({"cars": [{"kind": "seek", "position": [1]}]})
    with pytest.raises(ValueError):
        load_config({"neighbor_mode": "eventually"})
    with pytest.raises(ValueError):
        Simulation(load_config({"cars": [{"kind": "teleport"}]}))


def test_from_yaml_round_trip(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text(
        "\n".join(
            [
                "width: 300",
                "height: 200",
                "neighbor_mode: snapshot",
                "cars:",
                "  - kind: arrive",
                "    name: parker",
                "    position: [10, -10]",
                "    max_speed: 120",
                "    params: {source: click, stop_distance: 3}",
            ]
        )
    )
    config = SimulationConfig.from_yaml(path)
    assert config.neighbor_mode == "snapshot"
    simulation = Simulation(config)
    parker = simulation.cars[0]
    assert parker.name == "parker"
    assert parker.position == Vector2(10.0, -10.0)
    assert parker.max_speed == 120.0


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SimulationConfig.from_yaml(path) == SimulationConfig()


def test_bundled_example_config_builds():
    config = SimulationConfig.from_yaml(REPO_ROOT / "config" / "cars.yaml")
    simulation = Simulation(config)
    assert [car.name for car in simulation.cars] == ["wanderer", "seeker", "parker", "coward", "hunter"]
    for _ in range(10):
        simulation.step(config.time_step)


def test_null_params_become_empty_mapping():
    config = load_config({"cars": [{"kind": "idle", "name": "quiet", "params": None}]})
    assert config.cars[0].params == {}
    assert Simulation(config).cars[0].name == "quiet"


def test_non_mapping_params_are_rejected():
    with pytest.raises(ValueError):
        load_config({"cars": [{"kind": "seek", "params": ["click"]}]})
