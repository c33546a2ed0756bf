"""Allocation strategy implementations"""

from config.errors import ConfigurationError
from config.group_control import AllocationStrategyConfig
from ..interfaces.allocation_strategy import IAllocationStrategy
from .nearest_car import NearestCarStrategy

STRATEGIES = {
    "NearestCar": NearestCarStrategy,
}


def create_allocation_strategy(config: AllocationStrategyConfig) -> IAllocationStrategy:
    """
    Build the strategy named in the configuration

    Raises:
        ConfigurationError: If the strategy name is unknown
    """
    strategy_class = STRATEGIES.get(config.name)
    if strategy_class is None:
        raise ConfigurationError(f"Unknown allocation strategy: {config.name}")
    return strategy_class(**config.parameters)


__all__ = ['NearestCarStrategy', 'STRATEGIES', 'create_allocation_strategy']
