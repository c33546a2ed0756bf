"""
Nearest Car Strategy

Distance-based allocation that never asks a moving car to turn back.
"""

from typing import Optional, Sequence

from simulator.core.direction import Direction
from simulator.core.elevator import Elevator
from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestCarStrategy(IAllocationStrategy):
    """
    Nearest car allocation strategy

    Selection Logic:
    - Idle elevators: score is the distance to the call floor
    - Busy elevators travelling in the call direction with the call floor
      strictly ahead: score is the distance to the call floor
    - Any other busy elevator is not a candidate
    - Lowest score wins; on a tie the earlier elevator keeps the call

    Usage:
        strategy = NearestCarStrategy()
        selected = strategy.select_elevator(5, Direction.UP, fleet.elevators)
    """

    def select_elevator(
        self,
        floor: int,
        direction: Direction,
        elevators: Sequence[Elevator]
    ) -> Optional[Elevator]:
        best_elevator = None
        best_score = float('inf')

        for elevator in elevators:
            score = self._score(elevator, floor, direction)
            if score is None:
                continue

            # Strict comparison keeps the first elevator on a tie
            if score < best_score:
                best_score = score
                best_elevator = elevator

        return best_elevator

    @staticmethod
    def _score(elevator: Elevator, floor: int, direction: Direction) -> Optional[int]:
        """Distance score, or None when the elevator cannot take the call"""
        if elevator.is_idle():
            return elevator.get_distance_to(floor)

        if elevator.busy and elevator.direction == direction and elevator.is_on_the_way(floor, direction):
            return elevator.get_distance_to(floor)

        return None

    def get_strategy_name(self) -> str:
        """Return strategy name"""
        return "Nearest Car (Distance-based, same direction only)"
