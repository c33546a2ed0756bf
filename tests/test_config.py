"""
Configuration tests
"""

import pytest
import yaml

from config import (
    BuildingConfig,
    ConfigurationError,
    ElevatorConfig,
    GroupControlConfig,
    SimulationConfig,
    TrafficConfig,
    load_group_control_config,
    load_simulation_config,
    save_simulation_config,
)
from controller.algorithms import NearestCarStrategy, create_allocation_strategy


def test_defaults_match_building_specs():
    elevator = ElevatorConfig()

    assert BuildingConfig().total_floors == 10
    assert elevator.total_elevators == 4
    assert elevator.floor_travel_time == 10.0
    assert elevator.stop_duration == 10.0


@pytest.mark.parametrize("kwargs", [
    {"total_elevators": 0},
    {"floor_travel_time": 0},
    {"floor_travel_time": -2.5},
    {"stop_duration": 0},
    {"initial_floor": 0},
])
def test_invalid_elevator_config_fails_fast(kwargs):
    with pytest.raises(ConfigurationError):
        ElevatorConfig(**kwargs)


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        BuildingConfig(total_floors=0)


def test_unknown_traffic_pattern_is_rejected():
    with pytest.raises(ConfigurationError):
        TrafficConfig(pattern="rush_hour")


def test_scripted_call_needs_valid_direction():
    with pytest.raises(ConfigurationError):
        TrafficConfig(calls=[{"time": 0, "floor": 3, "direction": "LEFT"}])


def test_validate_checks_calls_against_building():
    config = SimulationConfig.from_dict({
        "simulation": {
            "building": {"total_floors": 5},
            "traffic": {"calls": [{"time": 1.0, "floor": 6, "direction": "DOWN"}]},
        }
    })

    with pytest.raises(ConfigurationError):
        config.validate()


def test_validate_checks_initial_floor_against_building():
    config = SimulationConfig.from_dict({
        "simulation": {
            "building": {"total_floors": 3},
            "elevator": {"initial_floor": 4},
        }
    })

    with pytest.raises(ConfigurationError):
        config.validate()


def test_load_simulation_config_from_yaml(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text(yaml.dump({
        "simulation": {
            "building": {"total_floors": 12},
            "elevator": {"total_elevators": 2, "floor_travel_time": 1.5, "stop_duration": 4},
            "traffic": {
                "pattern": "scripted",
                "simulation_duration": 100,
                "calls": [{"time": 3, "floor": 7, "direction": "UP"}],
            },
            "random_seed": 7,
        }
    }))

    config = load_simulation_config(path)

    assert config.building.total_floors == 12
    assert config.elevator.total_elevators == 2
    assert config.elevator.floor_travel_time == 1.5
    assert config.traffic.calls == [{"time": 3, "floor": 7, "direction": "UP"}]
    assert config.random_seed == 7


def test_saved_simulation_config_loads_back(tmp_path):
    path = tmp_path / "nested" / "sim.yaml"
    config = SimulationConfig(
        building=BuildingConfig(total_floors=6),
        elevator=ElevatorConfig(total_elevators=3),
        traffic=TrafficConfig(pattern="random", call_rate=0.5),
        random_seed=1,
    )

    save_simulation_config(config, path)

    assert load_simulation_config(path) == config


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_simulation_config(tmp_path / "missing.yaml")


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    config = load_group_control_config(path)

    assert config.allocation_strategy.name == "NearestCar"


def test_unknown_allocation_strategy_is_rejected(tmp_path):
    path = tmp_path / "gc.yaml"
    path.write_text("group_control:\n  allocation_strategy:\n    name: Random\n")

    with pytest.raises(ConfigurationError):
        load_group_control_config(path)


def test_strategy_factory_builds_nearest_car():
    strategy = create_allocation_strategy(GroupControlConfig().allocation_strategy)

    assert isinstance(strategy, NearestCarStrategy)


@pytest.mark.parametrize("call", [
    {"time": None, "floor": 3, "direction": "UP"},
    {"time": "soon", "floor": 3, "direction": "UP"},
    {"time": 1.0, "floor": "5", "direction": "UP"},
    {"time": 1.0, "floor": 2.5, "direction": "DOWN"},
])
def test_scripted_call_with_wrong_types_is_rejected(call):
    with pytest.raises(ConfigurationError):
        TrafficConfig(calls=[call])


def test_scripted_call_with_wrong_types_in_yaml_is_rejected(tmp_path):
    path = tmp_path / "bad_call.yaml"
    path.write_text(
        "simulation:\n"
        "  traffic:\n"
        "    calls:\n"
        "      - {time: null, floor: 3, direction: UP}\n"
    )

    with pytest.raises(ConfigurationError):
        load_simulation_config(str(path))
