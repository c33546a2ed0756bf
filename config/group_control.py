"""
Group Control System Configuration

Selects the allocation strategy the dispatcher uses for hall calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .errors import ConfigurationError

KNOWN_ALLOCATION_STRATEGIES = ("NearestCar",)


@dataclass
class AllocationStrategyConfig:
    """Configuration for call allocation strategy"""
    name: str = "NearestCar"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("allocation_strategy.name cannot be empty")


@dataclass
class GroupControlConfig:
    """Group Control System configuration"""
    allocation_strategy: AllocationStrategyConfig = field(default_factory=AllocationStrategyConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'GroupControlConfig':
        """Create GroupControlConfig from dictionary"""
        gc_data = (data or {}).get('group_control', data or {})

        alloc_data = gc_data.get('allocation_strategy', {})
        allocation_strategy = AllocationStrategyConfig(
            name=alloc_data.get('name', 'NearestCar'),
            parameters=alloc_data.get('parameters', {})
        )

        return cls(allocation_strategy=allocation_strategy)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'group_control': {
                'allocation_strategy': {
                    'name': self.allocation_strategy.name,
                    'parameters': self.allocation_strategy.parameters
                }
            }
        }

    def validate(self):
        if self.allocation_strategy.name not in KNOWN_ALLOCATION_STRATEGIES:
            raise ConfigurationError(
                f"Unknown allocation strategy: {self.allocation_strategy.name}. "
                f"Known strategies: {', '.join(KNOWN_ALLOCATION_STRATEGIES)}")
