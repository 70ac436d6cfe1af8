"""
Parameter sweep expansion, e.g. for convergence studies over the tolerance.

Expands a config with sweep specifications into multiple configs,
one for each parameter combination.
"""

import copy
import itertools
from dataclasses import replace
from typing import Any, Iterator

import numpy as np

from .schema import Config, SweepConfig


def expand_sweeps(config: Config) -> Iterator[Config]:
    """
    Expand a configuration with sweeps into individual configurations.

    If no sweeps are defined, yields the original config once.

    Parameters
    ----------
    config : Config
        Configuration potentially containing sweep specifications.

    Yields
    ------
    Config
        Individual configurations with sweep parameters resolved.
    """
    if not config.sweeps:
        yield replace(config, sweeps=[])
        return

    paths = [sweep.path for sweep in config.sweeps]
    value_lists = [_expand_sweep_values(sweep) for sweep in config.sweeps]

    # Cartesian product of all sweep parameters
    for combo in itertools.product(*value_lists):
        new_config = copy.deepcopy(config)
        for path, value in zip(paths, combo):
            _set_nested_item(new_config, path, value)
        yield replace(new_config, sweeps=[])


def _expand_sweep_values(sweep: SweepConfig) -> list[Any]:
    """Convert sweep specification to list of values."""
    if sweep.linspace is not None:
        start, stop, num = sweep.linspace
        return np.linspace(start, stop, int(num)).tolist()
    elif sweep.logspace is not None:
        start, stop, num = sweep.logspace
        return np.logspace(start, stop, int(num)).tolist()
    elif sweep.values is not None:
        return list(sweep.values)
    else:
        raise ValueError(f"Sweep at path '{sweep.path}' has no values specified. "
                         "Use linspace, logspace, or values.")


def _set_nested_item(config: Config, path: str, value: Any) -> None:
    """
    Set a value inside a config section using dot notation.

    Example: path="integrator.max-error" sets config.integrator["max-error"] = value
    """
    [section, *keys] = path.split(".")
    if not keys:
        raise ValueError(f"Sweep path '{path}' must name a key inside a section")
    obj = getattr(config, section)
    for key in keys[:-1]:
        obj = obj.setdefault(key, {})
    obj[keys[-1]] = value


def count_sweep_combinations(config: Config) -> int:
    """
    Count the total number of configurations that would be generated.

    Returns 1 if no sweeps are defined.
    """
    total = 1
    for sweep in config.sweeps:
        total *= len(_expand_sweep_values(sweep))
    return total
