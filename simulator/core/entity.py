import itertools
from typing import Optional

import simpy


class Entity:
    """
    Base class for entities that live in a SimPy simulation.

    Holds the environment, a unique entity ID, a display name and a
    string state. Unlike a free-running process, an entity here only
    starts SimPy processes when asked to (for example when an elevator
    receives work), so the process handle may be None.
    """
    # Entity ID counter shared across all class instances
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: str = None):
        """
        Args:
            env: The SimPy environment this entity belongs to.
            name: Entity name. If not specified, generated from class name and ID.
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        # Concrete classes move out of this state in their own __init__
        self.state: str = "initial_state"

        self._process: Optional[simpy.Process] = None

    def set_state(self, new_state: str):
        """
        Transition the entity's state.

        Calls _on_state_changed only when the state actually changes.
        """
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def get_state(self) -> str:
        return self.state

    def _on_state_changed(self, old_state: str, new_state: str):
        """Hook for subclasses (status reporting, tracing)"""
        pass

    @property
    def process(self) -> Optional[simpy.Process]:
        """
        The SimPy process currently driving this entity, if any.
        """
        return self._process
