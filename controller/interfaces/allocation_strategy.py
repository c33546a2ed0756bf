"""
Allocation Strategy Interface

Defines how an elevator is selected for a hall call.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from simulator.core.direction import Direction
from simulator.core.elevator import Elevator


class IAllocationStrategy(ABC):
    """
    Interface for elevator allocation strategies

    A strategy only scores; it never changes elevator state. Applying the
    choice (queueing the floor, starting the car) is the group control
    system's job.
    """

    @abstractmethod
    def select_elevator(
        self,
        floor: int,
        direction: Direction,
        elevators: Sequence[Elevator]
    ) -> Optional[Elevator]:
        """
        Select the best elevator for a hall call

        Args:
            floor: Floor where the call was made
            direction: Requested travel direction
            elevators: Candidates in dispatch order

        Returns:
            The chosen elevator, or None when no elevator may take the call
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Strategy name (for logging and debugging)"""
        pass
