"""
Event log sink.

Components receive a log callable at construction instead of writing to a
shared logger. EventLog is the standard sink: it keeps entries newest
first, the way a status panel shows them, and can echo them to stdout or
publish them on the broker.
"""

import time
from collections import deque
from dataclasses import dataclass
from typing import List, Optional

import simpy

from .message_broker import MessageBroker


@dataclass(frozen=True)
class LogEntry:
    time: float
    message: str
    elevator_id: Optional[int] = None

    def format(self) -> str:
        source = f"Elevator {self.elevator_id}" if self.elevator_id is not None else "GCS"
        return f"{self.time:.2f}: [{source}] {self.message}"

    def to_dict(self) -> dict:
        return {"time": self.time, "message": self.message, "elevator_id": self.elevator_id}


class EventLog:
    """
    Callable log sink: `log(message, elevator_id=None)`.

    Prefixing with the elevator id is done here when formatting, never by
    the caller. A None elevator id marks a fleet-level message.
    """
    LOG_TOPIC = "log"

    def __init__(self, env: Optional[simpy.Environment] = None,
                 broker: Optional[MessageBroker] = None,
                 echo: bool = False, max_entries: Optional[int] = None):
        """
        Args:
            env: Clock for timestamps; wall-clock time when omitted
            broker: Publish each entry on the 'log' topic when given
            echo: Also print each entry
            max_entries: Keep only the most recent entries
        """
        self.env = env
        self.broker = broker
        self.echo = echo
        self._entries = deque(maxlen=max_entries)

    def _now(self) -> float:
        return self.env.now if self.env is not None else time.time()

    def log(self, message: str, elevator_id: Optional[int] = None) -> LogEntry:
        entry = LogEntry(time=self._now(), message=message, elevator_id=elevator_id)
        self._entries.appendleft(entry)

        if self.echo:
            print(entry.format())
        if self.broker is not None:
            self.broker.put(self.LOG_TOPIC, entry.to_dict())
        return entry

    __call__ = log

    @property
    def entries(self) -> List[LogEntry]:
        """All retained entries, newest first"""
        return list(self._entries)

    @property
    def messages(self) -> List[str]:
        return [entry.message for entry in self._entries]

    def for_elevator(self, elevator_id: Optional[int]) -> List[LogEntry]:
        """Entries from one elevator, or fleet-level entries when None"""
        return [entry for entry in self._entries if entry.elevator_id == elevator_id]

    def clear(self):
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
