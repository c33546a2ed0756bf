from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import simpy

from config.errors import ConfigurationError
from .direction import Direction, direction_label
from .entity import Entity
from ..infrastructure.message_broker import MessageBroker

# (message, elevator_id) -> None; elevator_id is None for fleet-level messages
LogSink = Callable[[str, Optional[int]], None]


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Read-only view of an elevator at one instant of simulation time"""
    id: int
    current_floor: int
    direction: Optional[Direction]
    busy: bool
    loading: bool
    queue: Tuple[int, ...]
    state: str
    timestamp: float

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "elevator_id": self.id,
            "current_floor": self.current_floor,
            "direction": self.direction.value if self.direction is not None else None,
            "busy": self.busy,
            "loading": self.loading,
            "queue": list(self.queue),
            "state": self.state,
        }


class Elevator(Entity):
    """
    Elevator car that sequences its queue of requested floors into
    directional sweeps.

    Within one sweep the car never reverses: it serves every queued floor
    ahead of it (inclusive of the floor it is standing at) closest-first,
    and only then turns around. The batch of floors for a sweep is a copy
    taken when the sweep starts; floors queued while the batch is running
    wait for the next batch even if the car passes them.

    Movement and dwell are SimPy timeouts, so the same code runs against
    simulated time or a real-time environment.
    """

    def __init__(self, env: simpy.Environment, elevator_id: int,
                 floor_travel_time: float, stop_duration: float,
                 initial_floor: int = 1, log: Optional[LogSink] = None,
                 broker: Optional[MessageBroker] = None):
        """
        Args:
            env: SimPy environment providing the clock
            elevator_id: Stable identity of this car
            floor_travel_time: Time to travel between two adjacent floors
            stop_duration: Passenger dwell time at each serviced floor
            initial_floor: Floor the car starts on
            log: Log sink receiving (message, elevator_id). Falls back to stdout.
            broker: Optional broker for status snapshots and service events
        """
        if floor_travel_time <= 0:
            raise ConfigurationError(f"floor_travel_time must be positive, got {floor_travel_time}")
        if stop_duration <= 0:
            raise ConfigurationError(f"stop_duration must be positive, got {stop_duration}")

        # Set before super().__init__ so state hooks can report status
        self.id = elevator_id
        self.current_floor = initial_floor
        self.queue: List[int] = []
        self.direction: Optional[Direction] = None
        self.busy = False
        self.loading = False

        self.floor_travel_time = floor_travel_time
        self.stop_duration = stop_duration
        self.log_sink = log
        self.broker = broker
        self.status_topic = f"elevator/{elevator_id}/status"
        self.serviced_topic = f"elevator/{elevator_id}/floor_serviced"

        super().__init__(env, f"Elevator_{elevator_id}")
        self.set_state("IDLE")

    def log(self, message: str):
        """Send a message to the injected sink, or print it with an elevator prefix"""
        if self.log_sink is not None:
            self.log_sink(message, self.id)
        else:
            print(f"{self.env.now:.2f}: [Elevator {self.id}] {message}")

    # --- Queries used by the dispatcher ---

    def add_to_queue(self, floor: int) -> bool:
        """
        Queue a floor if it is not already pending.

        Returns:
            True if the floor was newly added, False if it was already queued
        """
        if floor in self.queue:
            return False
        self.queue.append(floor)
        self._report_status()
        return True

    def is_idle(self) -> bool:
        return not self.busy and not self.queue

    def is_on_the_way(self, floor: int, direction: Direction) -> bool:
        """
        Whether a call at `floor` heading `direction` lies strictly ahead of
        the moving car. A car standing exactly at the floor does not count.
        """
        if not self.busy or self.direction != direction:
            return False
        if direction == Direction.UP:
            return floor > self.current_floor
        return floor < self.current_floor

    def get_distance_to(self, floor: int) -> int:
        return abs(floor - self.current_floor)

    def get_floors_in_current_direction(self) -> List[int]:
        """
        Queued floors at or ahead of the car in its current direction,
        sorted in the order they will be reached.

        Returns a new list; later changes to the queue do not affect it.
        """
        if self.direction is None:
            return []

        if self.direction == Direction.UP:
            return sorted(floor for floor in self.queue if floor >= self.current_floor)
        return sorted((floor for floor in self.queue if floor <= self.current_floor), reverse=True)

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            id=self.id,
            current_floor=self.current_floor,
            direction=self.direction,
            busy=self.busy,
            loading=self.loading,
            queue=tuple(self.queue),
            state=self.state,
            timestamp=self.env.now,
        )

    # --- Timed actions ---

    def move_to_floor(self, target_floor: int):
        """
        Travel to target_floor one floor per floor_travel_time.

        current_floor is updated after every floor so observers see each
        intermediate position. Generator; use with `yield from` or env.process().
        """
        if target_floor == self.current_floor:
            return

        self.log(f"Moving {direction_label(self.direction)} to floor {target_floor}")
        step = 1 if target_floor > self.current_floor else -1
        self.set_state("MOVING")

        while self.current_floor != target_floor:
            yield self.env.timeout(self.floor_travel_time)
            self.current_floor += step
            self._report_status()

    def load_passengers(self):
        """Dwell at the current floor for stop_duration with loading set"""
        self.log("Loading/unloading passengers")
        self.loading = True
        self.set_state("LOADING")
        yield self.env.timeout(self.stop_duration)
        self.loading = False
        self.set_state("STOPPED")

    # --- Sweep ---

    def start_moving(self) -> simpy.Process:
        """
        Mark the car busy and start the sweep process that drains the queue.

        busy and the initial direction are set before this returns, so a
        dispatcher running at the same simulation instant already sees the
        car as working in that direction.

        Raises:
            RuntimeError: If the car is already running a sweep
        """
        if self.busy:
            raise RuntimeError(f"Elevator {self.id} is already moving")

        self.busy = True
        self._report_status()
        if self.direction is None and self.queue:
            self._choose_initial_direction()
        self._process = self.env.process(self._sweep())
        return self._process

    def _choose_initial_direction(self):
        # Driven by the oldest request, not the nearest one
        first_floor = self.queue[0]
        self._set_direction(Direction.UP if first_floor > self.current_floor else Direction.DOWN)
        self.log(f"Initial direction set to: {self.direction.label}")

    def _sweep(self):
        while self.queue:
            if self.direction is None:
                self._choose_initial_direction()

            batch = self.get_floors_in_current_direction()

            if not batch:
                self._set_direction(self.direction.opposite)
                self.log(f"Switching direction to: {self.direction.label}")
                continue

            for target_floor in batch:
                if self.current_floor != target_floor:
                    yield from self.move_to_floor(target_floor)

                yield from self.load_passengers()

                if target_floor in self.queue:
                    self.queue.remove(target_floor)
                self._report_floor_serviced(target_floor)

            # The queue may have grown while the batch was being served
            if not self.get_floors_in_current_direction() and self.queue:
                self.log(f"Completed {self.direction.label} run, switching direction")
                self._set_direction(self.direction.opposite)

        self._set_direction(None)
        self.busy = False
        self.set_state("IDLE")
        self._report_status()
        self.log("Completed all requests. Now idle.")

    # --- Status reporting ---

    def _set_direction(self, new_direction: Optional[Direction]):
        if self.direction != new_direction:
            self.direction = new_direction
            self._report_status()

    def _on_state_changed(self, old_state: str, new_state: str):
        self._report_status()

    def _report_status(self):
        if self.broker is not None:
            self.broker.put(self.status_topic, self.snapshot().to_dict())

    def _report_floor_serviced(self, floor: int):
        if self.broker is not None:
            self.broker.put(self.serviced_topic, {
                "timestamp": self.env.now,
                "elevator_id": self.id,
                "floor": floor,
            })

    def __repr__(self):
        return (f"Elevator(id={self.id}, floor={self.current_floor}, "
                f"direction={direction_label(self.direction)}, busy={self.busy}, queue={self.queue})")
