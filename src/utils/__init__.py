"""Utility functions for the Tetris engine."""
from .config import DEFAULT_CONFIG, load_config, merge_config, simulation_config
from .logger import Logger, MetricsTracker

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "merge_config",
    "simulation_config",
    "Logger",
    "MetricsTracker",
]
