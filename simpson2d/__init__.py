"""
Adaptive 2D integration with the extended Simpson rule.
"""

from simpson2d.domain import Axis, Grid, Spacing, FunctionMap
from simpson2d.numeric import (
    IntegrationReport,
    IterationRecord,
    NonConvergenceError,
    ScalarField,
    Simpson2D,
)
