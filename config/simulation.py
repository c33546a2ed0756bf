"""
Simulation Configuration

Building size, elevator timings and the traffic to feed into a run.
Values are fixed for the lifetime of one simulation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError

TRAFFIC_PATTERNS = ("scripted", "random")
CALL_DIRECTIONS = ("UP", "DOWN")


@dataclass
class BuildingConfig:
    """Building specifications"""
    total_floors: int = 10

    def __post_init__(self):
        if self.total_floors < 1:
            raise ConfigurationError("total_floors must be at least 1")


@dataclass
class ElevatorConfig:
    """Elevator bank specifications"""
    total_elevators: int = 4
    floor_travel_time: float = 10.0  # seconds per floor
    stop_duration: float = 10.0  # seconds of passenger dwell per stop
    initial_floor: int = 1

    def __post_init__(self):
        if self.total_elevators < 1:
            raise ConfigurationError("total_elevators must be at least 1")
        if self.floor_travel_time <= 0:
            raise ConfigurationError("floor_travel_time must be positive")
        if self.stop_duration <= 0:
            raise ConfigurationError("stop_duration must be positive")
        if self.initial_floor < 1:
            raise ConfigurationError("initial_floor must be at least 1")


@dataclass
class TrafficConfig:
    """
    Hall call traffic.

    pattern:
        scripted - fire the calls listed in `calls` at their given times
        random   - generate calls with exponential inter-arrival times
    """
    pattern: str = "scripted"
    simulation_duration: float = 600.0  # seconds
    call_rate: float = 0.02  # calls per second (random pattern)
    calls: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if self.pattern not in TRAFFIC_PATTERNS:
            raise ConfigurationError(f"traffic.pattern must be one of {TRAFFIC_PATTERNS}, got '{self.pattern}'")
        if self.simulation_duration <= 0:
            raise ConfigurationError("simulation_duration must be positive")
        if self.call_rate < 0:
            raise ConfigurationError("call_rate cannot be negative")

        for call in self.calls:
            if 'floor' not in call or 'direction' not in call:
                raise ConfigurationError(f"Scripted call needs 'floor' and 'direction': {call}")
            if str(call['direction']).upper() not in CALL_DIRECTIONS:
                raise ConfigurationError(f"Scripted call direction must be UP or DOWN: {call}")
            floor = call['floor']
            if isinstance(floor, bool) or not isinstance(floor, int):
                raise ConfigurationError(f"Scripted call floor must be an integer: {call}")
            call_time = call.get('time', 0.0)
            if isinstance(call_time, bool) or not isinstance(call_time, (int, float)):
                raise ConfigurationError(f"Scripted call time must be a number: {call}")
            if call_time < 0:
                raise ConfigurationError(f"Scripted call time cannot be negative: {call}")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, elevator and traffic settings.
    """
    building: BuildingConfig
    elevator: ElevatorConfig
    traffic: TrafficConfig

    # Simulation control
    random_seed: Optional[int] = None
    realtime_factor: float = 0.0  # 0.0 = as fast as possible, 1.0 = realtime

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise ConfigurationError("realtime_factor cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = (data or {}).get('simulation', data or {})

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            total_floors=building_data.get('total_floors', 10)
        )

        elevator_data = sim_data.get('elevator', {})
        elevator = ElevatorConfig(
            total_elevators=elevator_data.get('total_elevators', 4),
            floor_travel_time=elevator_data.get('floor_travel_time', 10.0),
            stop_duration=elevator_data.get('stop_duration', 10.0),
            initial_floor=elevator_data.get('initial_floor', 1)
        )

        traffic_data = sim_data.get('traffic', {})
        traffic = TrafficConfig(
            pattern=traffic_data.get('pattern', 'scripted'),
            simulation_duration=traffic_data.get('simulation_duration', 600.0),
            call_rate=traffic_data.get('call_rate', 0.02),
            calls=list(traffic_data.get('calls') or [])
        )

        return cls(
            building=building,
            elevator=elevator,
            traffic=traffic,
            random_seed=sim_data.get('random_seed'),
            realtime_factor=sim_data.get('realtime_factor', 0.0)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'total_floors': self.building.total_floors
                },
                'elevator': {
                    'total_elevators': self.elevator.total_elevators,
                    'floor_travel_time': self.elevator.floor_travel_time,
                    'stop_duration': self.elevator.stop_duration,
                    'initial_floor': self.elevator.initial_floor
                },
                'traffic': {
                    'pattern': self.traffic.pattern,
                    'simulation_duration': self.traffic.simulation_duration,
                    'call_rate': self.traffic.call_rate,
                    'calls': self.traffic.calls
                },
                'realtime_factor': self.realtime_factor
            }
        }

        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    def validate(self):
        """Validate consistency across sections"""
        total_floors = self.building.total_floors

        if self.elevator.initial_floor > total_floors:
            raise ConfigurationError(
                f"elevator.initial_floor ({self.elevator.initial_floor}) cannot exceed "
                f"building.total_floors ({total_floors})")

        for call in self.traffic.calls:
            if not (1 <= call['floor'] <= total_floors):
                raise ConfigurationError(
                    f"Scripted call floor {call['floor']} is outside 1..{total_floors}")
