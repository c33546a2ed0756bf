"""
Elevator Simulator - Core simulation engine

This package provides the elevator state machine, the fleet container,
hall call intake and the SimPy infrastructure they run on.
"""

__version__ = "0.1.0"

from .core.direction import Direction
from .core.elevator import Elevator, ElevatorSnapshot
from .core.fleet import Fleet
from .core.hall_button import HallButton, create_hall_buttons
from .core.entity import Entity

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment, create_environment
from .infrastructure.event_log import EventLog, LogEntry

__all__ = [
    'Direction',
    'Elevator',
    'ElevatorSnapshot',
    'Fleet',
    'HallButton',
    'create_hall_buttons',
    'Entity',
    'MessageBroker',
    'RealtimeEnvironment',
    'create_environment',
    'EventLog',
    'LogEntry',
]
