from .quadrature import integrate_on_grid, simpson_rule
from .integrator import (
    IntegrationReport,
    IterationRecord,
    NonConvergenceError,
    ScalarField,
    Simpson2D,
)
