"""
Elevator System Analyzer

Records broker traffic during a run and reports performance:
trajectories, call service times and a travel diagram.
"""

__version__ = "0.1.0"

from .statistics import Statistics

__all__ = ['Statistics']
