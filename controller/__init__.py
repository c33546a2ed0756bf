"""
Elevator Group Control System

This package provides the dispatcher and the allocation strategies it
uses to share hall calls across the elevator bank.
"""

__version__ = "0.1.0"

from .group_control import GroupControlSystem, InvalidCallError
from .algorithms import NearestCarStrategy, create_allocation_strategy

__all__ = ['GroupControlSystem', 'InvalidCallError', 'NearestCarStrategy', 'create_allocation_strategy']
