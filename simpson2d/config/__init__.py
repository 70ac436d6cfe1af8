"""
Configuration module for TOML-based integration parameters.

Provides:
- Schema dataclasses for the configuration
- TOML loading and saving
- Parameter sweep expansion for convergence studies
"""

from .schema import Config, SweepConfig

from .loader import load_config, save_config, config_from_dict

from .sweep import expand_sweeps, count_sweep_combinations

__all__ = [
    # Schema classes
    "Config",
    "SweepConfig",
    # Loader functions
    "load_config",
    "save_config",
    "config_from_dict",
    # Sweep functions
    "expand_sweeps",
    "count_sweep_combinations",
]
