"""
Configuration management package

Provides configuration classes for group control and simulation.
"""

from .errors import ConfigurationError

from .group_control import (
    GroupControlConfig,
    AllocationStrategyConfig,
)

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    ElevatorConfig,
    TrafficConfig,
)

from .config_loader import (
    ConfigLoader,
    load_group_control_config,
    load_simulation_config,
    save_group_control_config,
    save_simulation_config,
)

__all__ = [
    'ConfigurationError',

    # Group control
    'GroupControlConfig',
    'AllocationStrategyConfig',

    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'ElevatorConfig',
    'TrafficConfig',

    # Loader
    'ConfigLoader',
    'load_group_control_config',
    'load_simulation_config',
    'save_group_control_config',
    'save_simulation_config',
]
