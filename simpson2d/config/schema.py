"""
Configuration schema.

Minimal schema with one section per concern:
- integrator: options of the Simpson2D integrator, named as in the registry
  (max-iterations, initial-nstep, max-error, in-loge, fast-density-increase)
- domain: integration limits
- sweeps: parameter sweep specifications

The integrator and domain sections are raw dicts; their meaning lives in the
consuming code (run.py), not here.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SweepConfig:
    """
    A parameter to sweep, addressed by a dotted path such as "integrator.max-error".

    Exactly one of values, linspace=[start, stop, num] or logspace=[start, stop, num].
    """
    path: str
    values: list[Any] | None = None
    linspace: list[float] | None = None
    logspace: list[float] | None = None


@dataclass
class Config:
    """Top-level configuration."""
    integrator: dict[str, Any]
    domain: dict[str, Any] = field(default_factory=dict)
    sweeps: list[SweepConfig] = field(default_factory=list)
