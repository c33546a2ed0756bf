"""
Fleet - the fixed bank of elevators serving one building

The fleet owns its elevators; size and timings are fixed when it is
built and never change during a run.
"""

from typing import Iterator, List, Optional

import simpy

from config.errors import ConfigurationError
from config.simulation import SimulationConfig
from .elevator import Elevator, ElevatorSnapshot, LogSink
from ..infrastructure.message_broker import MessageBroker


class Fleet:
    """
    Ordered, fixed-size collection of elevators.

    Iteration order is the dispatch order, so the first car in the fleet
    wins ties when two cars score the same for a call.
    """

    def __init__(self, env: simpy.Environment, total_floors: int, total_elevators: int,
                 floor_travel_time: float, stop_duration: float, initial_floor: int = 1,
                 log: Optional[LogSink] = None, broker: Optional[MessageBroker] = None):
        """
        Args:
            env: SimPy environment
            total_floors: Floors in the building (calls are valid in 1..total_floors)
            total_elevators: Number of cars, numbered from 1
            floor_travel_time: Time per floor of travel
            stop_duration: Dwell time at each serviced floor
            initial_floor: Floor every car starts on
            log: Log sink shared by all cars
            broker: Optional broker for status publication

        Raises:
            ConfigurationError: If any size or timing is out of range
        """
        if total_floors < 1:
            raise ConfigurationError("total_floors must be at least 1")
        if total_elevators < 1:
            raise ConfigurationError("total_elevators must be at least 1")
        if floor_travel_time <= 0:
            raise ConfigurationError("floor_travel_time must be positive")
        if stop_duration <= 0:
            raise ConfigurationError("stop_duration must be positive")
        if not (1 <= initial_floor <= total_floors):
            raise ConfigurationError(f"initial_floor must be between 1 and {total_floors}")

        self.env = env
        self.total_floors = total_floors
        self.elevators: List[Elevator] = [
            Elevator(env, elevator_id, floor_travel_time, stop_duration,
                     initial_floor=initial_floor, log=log, broker=broker)
            for elevator_id in range(1, total_elevators + 1)
        ]

    @classmethod
    def from_config(cls, env: simpy.Environment, config: SimulationConfig,
                    log: Optional[LogSink] = None,
                    broker: Optional[MessageBroker] = None) -> 'Fleet':
        return cls(
            env,
            total_floors=config.building.total_floors,
            total_elevators=config.elevator.total_elevators,
            floor_travel_time=config.elevator.floor_travel_time,
            stop_duration=config.elevator.stop_duration,
            initial_floor=config.elevator.initial_floor,
            log=log,
            broker=broker,
        )

    def get(self, elevator_id: int) -> Elevator:
        for elevator in self.elevators:
            if elevator.id == elevator_id:
                return elevator
        raise KeyError(f"No elevator with id {elevator_id}")

    def is_valid_floor(self, floor: int) -> bool:
        return 1 <= floor <= self.total_floors

    def all_idle(self) -> bool:
        return all(elevator.is_idle() for elevator in self.elevators)

    def snapshots(self) -> List[ElevatorSnapshot]:
        return [elevator.snapshot() for elevator in self.elevators]

    def __iter__(self) -> Iterator[Elevator]:
        return iter(self.elevators)

    def __len__(self):
        return len(self.elevators)

    def __getitem__(self, index: int) -> Elevator:
        return self.elevators[index]
