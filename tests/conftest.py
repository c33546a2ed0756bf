import sys
from pathlib import Path

import pytest
import simpy

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from simulator.infrastructure.event_log import EventLog
from simulator.infrastructure.message_broker import MessageBroker


@pytest.fixture
def env():
    return simpy.Environment()


@pytest.fixture
def broker(env):
    return MessageBroker(env)


@pytest.fixture
def event_log(env):
    return EventLog(env)
