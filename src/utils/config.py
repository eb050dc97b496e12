"""
Configuration loading.
"""
import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tetris.engine import SimulationConfig


DEFAULT_CONFIG: Dict[str, Any] = {
    'simulation': {
        'drop_interval': 8,
        'lock_delay_threshold': 12,
        'lock_delay_damping': 1.2,
        'rotation_system': 'simple',
        'seed': None,
    },
    'rewards': {
        'line_clear': 1.0,
        'game_over_penalty': -1.0,
        'survival_bonus': 0.001,
    },
    'logging': {
        'log_dir': 'logs',
        'name': 'session',
    },
    'play': {
        'games': 10,
        'max_ticks': 20000,
        'input_rate': 0.3,
    },
}


def merge_config(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively merge `override` into a copy of `base`."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file merged over the defaults.

    A missing path falls back to the defaults.
    """
    if config_path is None or not Path(config_path).exists():
        if config_path is not None:
            print(f"Config file not found: {config_path}")
            print("Using default configuration")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return merge_config(DEFAULT_CONFIG, loaded)


def simulation_config(config: Dict[str, Any]) -> SimulationConfig:
    """Build the engine settings from a loaded config."""
    return SimulationConfig.from_dict(config.get('simulation', {}))
