"""
TOML configuration loading and saving.

Uses tomllib (Python 3.11+) or tomli (backport) for reading,
and tomli_w for writing.
"""

import dataclasses
import sys
from pathlib import Path
from typing import Any

# Import tomllib or backport
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from .schema import Config, SweepConfig


def load_config(path: str | Path) -> Config:
    """Load a TOML configuration file and return a Config object."""
    path = Path(path)
    with open(path, "rb") as f:
        data = tomllib.load(f)
    return config_from_dict(data)


def config_from_dict(data: dict[str, Any]) -> Config:
    if "integrator" not in data:
        raise KeyError("Configuration has no [integrator] section")

    # TOML uses [[sweep]] array syntax
    sweeps = [SweepConfig(**sweep) for sweep in data.get("sweep", [])]

    return Config(
        integrator=dict(data["integrator"]),
        domain=dict(data.get("domain", {})),
        sweeps=sweeps,
    )


def save_config(config: Config, path: str | Path) -> None:
    """Save a Config object to a TOML file."""
    path = Path(path)
    data: dict[str, Any] = {"integrator": config.integrator}

    if config.domain:
        data["domain"] = config.domain
    if config.sweeps:
        # tomli_w cannot write None
        data["sweep"] = [
            {key: value for key, value in dataclasses.asdict(sweep).items() if value is not None}
            for sweep in config.sweeps
        ]

    with open(path, "wb") as f:
        tomli_w.dump(data, f)
