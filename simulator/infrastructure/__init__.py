"""Infrastructure components for simulation"""

from .message_broker import MessageBroker
from .realtime_env import RealtimeEnvironment, create_environment
from .event_log import EventLog, LogEntry

__all__ = [
    'MessageBroker',
    'RealtimeEnvironment',
    'create_environment',
    'EventLog',
    'LogEntry',
]
