"""Core simulation entities"""

from .direction import Direction
from .entity import Entity
from .elevator import Elevator, ElevatorSnapshot
from .fleet import Fleet
from .hall_button import HallButton, create_hall_buttons

__all__ = [
    'Direction',
    'Entity',
    'Elevator',
    'ElevatorSnapshot',
    'Fleet',
    'HallButton',
    'create_hall_buttons',
]
