"""Strategy interfaces for the group control system"""

from .allocation_strategy import IAllocationStrategy

__all__ = ['IAllocationStrategy']
