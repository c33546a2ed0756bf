from enum import Enum
from typing import Optional, Union


class Direction(str, Enum):
    """
    Travel direction of an elevator or of a hall call.

    Values are the upper-case strings used in broker messages, so a
    Direction compares equal to "UP" / "DOWN". An idle elevator has no
    direction and uses None instead.
    """
    UP = "UP"
    DOWN = "DOWN"

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP

    @property
    def label(self) -> str:
        """Human-readable form used in log messages ("Up" / "Down")"""
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Union[str, "Direction"]) -> "Direction":
        """
        Convert a user or message value into a Direction.

        Accepts Direction members and case-insensitive "up" / "down".

        Raises:
            ValueError: If the value is not a known direction
        """
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ValueError(f"Unknown direction: {value!r}. Must be 'UP' or 'DOWN'")


def direction_label(direction: Optional[Direction]) -> str:
    """Label for an optional direction; idle elevators read as 'None'"""
    return direction.label if direction is not None else "None"
