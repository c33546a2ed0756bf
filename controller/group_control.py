from typing import Dict, Optional, Sequence, Set, Tuple

from simulator.core.direction import Direction
from simulator.core.elevator import Elevator, LogSink
from simulator.core.fleet import Fleet
from simulator.core.hall_button import HallButton
from simulator.infrastructure.message_broker import MessageBroker
from .interfaces.allocation_strategy import IAllocationStrategy


class InvalidCallError(ValueError):
    """A hall call names a floor outside the building or an unknown direction"""


class GroupControlSystem:
    """
    Dispatcher for the elevator bank.

    Each call is scored and applied synchronously: nothing in
    assign_elevator yields, so a second call always sees the result of
    the first. The winning elevator gets the floor appended to its queue
    and, if it was idle, its sweep started. A call nobody can take is
    logged and dropped; there is no backlog.
    """
    ASSIGNMENT_TOPIC = 'gcs/hall_call_assignment'
    DROPPED_TOPIC = 'gcs/hall_call_dropped'

    def __init__(self, name: str, fleet: Fleet, strategy: IAllocationStrategy,
                 broker: Optional[MessageBroker] = None, log: Optional[LogSink] = None):
        self.name = name
        self.fleet = fleet
        self.strategy = strategy
        self.broker = broker
        self.log_sink = log
        self.hall_buttons: Dict[Tuple[int, Direction], HallButton] = {}
        # (floor, direction) -> ids of every elevator given that call while
        # its button is lit; the first of them to serve the floor turns it off
        self.pending_calls: Dict[Tuple[int, Direction], Set[int]] = {}

        self._log(f"Using strategy: {self.strategy.get_strategy_name()}")

    def _log(self, message: str, elevator_id: Optional[int] = None):
        if self.log_sink is not None:
            self.log_sink(message, elevator_id)
        else:
            print(f"{self._now():.2f} [{self.name}] {message}")

    def _now(self) -> float:
        if self.broker is not None:
            return self.broker.get_current_time()
        return self.fleet.env.now

    def register_hall_buttons(self, hall_buttons: Dict[Tuple[int, Direction], HallButton]):
        self.hall_buttons.update(hall_buttons)

    # --- Call intake ---

    def validate_call(self, floor: int, direction) -> Direction:
        """
        Check a call at the boundary before it reaches the dispatcher.

        Returns:
            The parsed direction

        Raises:
            InvalidCallError: If the floor is out of range or the direction unknown
        """
        if isinstance(floor, bool) or not isinstance(floor, int) or not self.fleet.is_valid_floor(floor):
            raise InvalidCallError(f"Floor {floor!r} is outside 1..{self.fleet.total_floors}")
        try:
            return Direction.parse(direction)
        except ValueError as e:
            raise InvalidCallError(str(e)) from e

    def submit_call(self, floor: int, direction) -> Optional[Elevator]:
        """Validate a call and dispatch it to the fleet"""
        direction = self.validate_call(floor, direction)
        return self.assign_elevator(floor, direction, self.fleet.elevators)

    # --- Dispatch ---

    def assign_elevator(self, floor: int, direction: Direction,
                        elevators: Sequence[Elevator]) -> Optional[Elevator]:
        """
        Give the call to the best elevator, or drop it.

        Returns:
            The elevator that took the call, or None if it was dropped
        """
        best_elevator = self.strategy.select_elevator(floor, direction, elevators)

        if best_elevator is None:
            self._log(f"No suitable elevator for floor {floor} going {direction.label}. Call dropped.")
            self._publish(self.DROPPED_TOPIC, {
                "timestamp": self._now(),
                "floor": floor,
                "direction": direction.value,
            })
            self._serve_button(floor, direction)
            return None

        was_idle = best_elevator.is_idle()
        best_elevator.add_to_queue(floor)
        self.pending_calls.setdefault((floor, direction), set()).add(best_elevator.id)
        self._log(f"Assigned call at floor {floor} going {direction.label}", best_elevator.id)
        self._publish(self.ASSIGNMENT_TOPIC, {
            "timestamp": self._now(),
            "floor": floor,
            "direction": direction.value,
            "assigned_elevator": best_elevator.id,
        })

        if was_idle:
            best_elevator.start_moving()

        return best_elevator

    def _publish(self, topic: str, message: dict):
        if self.broker is not None:
            self.broker.put(topic, message)

    def _serve_button(self, floor: int, direction: Direction):
        button = self.hall_buttons.get((floor, direction))
        if button is not None:
            button.serve()

    # --- SimPy processes ---

    def run(self):
        """
        Main process of GCS. Consumes hall calls from the broker one at a time.
        """
        if self.broker is None:
            raise RuntimeError("GroupControlSystem.run() needs a message broker")

        hall_call_topic = 'gcs/hall_call'
        while True:
            message = yield self.broker.get(hall_call_topic)
            try:
                self.submit_call(message['floor'], message['direction'])
            except InvalidCallError as e:
                self._log(f"Rejected hall call {message}: {e}")

    def start_service_listener(self, elevator: Elevator):
        """
        Generator that turns hall buttons off when `elevator` finishes
        dwelling at a floor it was assigned. Pass it to env.process().
        """
        if self.broker is None:
            raise RuntimeError("GroupControlSystem.start_service_listener() needs a message broker")
        return self._service_listener(elevator)

    def _service_listener(self, elevator: Elevator):
        while True:
            message = yield self.broker.get(elevator.serviced_topic)
            floor = message['floor']
            for key, elevator_ids in list(self.pending_calls.items()):
                if key[0] == floor and elevator.id in elevator_ids:
                    del self.pending_calls[key]
                    self._serve_button(*key)
