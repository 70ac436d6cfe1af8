"""
Adaptive integration in 2D with the extended Simpson rule. No physics meaning in this file.
"""

import dataclasses as dc
import logging
import typing

from simpson2d.domain import FunctionMap, Grid, Spacing, simpson_count
from simpson2d.numeric.quadrature import simpson_rule


logger = logging.getLogger(__name__)


class ScalarField(typing.Protocol):
    """A deterministic scalar function of two real variables.

    y = f(x0, x1)
    """

    def __call__(self, x0: float, x1: float) -> float: ...


Limits = typing.Sequence[typing.Sequence[float]]


@dc.dataclass
class IterationRecord:
    iteration: int
    nb_points: tuple[int, ...]
    nb_new_evaluations: int
    estimate: float
    previous: float | None = None
    error: float | None = None
    """Estimated relative error in percent, None for the baseline iteration."""


@dc.dataclass
class IntegrationReport:
    value: float
    error: float
    nb_iterations: int
    nb_evaluations: int
    nb_points: tuple[int, ...]
    history: list[IterationRecord] = dc.field(default_factory=list)
    function_map: FunctionMap | None = dc.field(default=None, repr=False, compare=False)
    """The cached samples on the final grid."""


class NonConvergenceError(RuntimeError):
    """The integral failed to reach the required accuracy within the iteration budget.

    This is fatal. The integration is deterministic, so calling it again with
    the same field, limits and parameters fails in exactly the same way.
    """

    def __init__(self, error: float, max_error: float, nb_points: tuple[int, ...], last_estimate: float,
                 history: list[IterationRecord]):
        super().__init__(
            f"Integral didn't converge to required numerical accuracy: estimated error = {error} % "
            f"(allowed {max_error} %) @ {nb_points} integration points")
        self.error = error
        self.max_error = max_error
        self.nb_points = nb_points
        self.last_estimate = last_estimate
        self.history = history


class Simpson2D:
    """The extended Simpson rule in 2D.

    The grid density is increased (2**n+1 points per axis) until two successive
    estimates agree within `max_error` percent. Function values computed on a
    coarser grid are reused on all the denser ones.
    """

    max_iterations: int
    initial_nstep: int
    max_error: float
    spacing: Spacing
    fast_density_increase: bool

    def __init__(self, max_iterations=20, initial_nstep=1, max_error=1e-3, spacing=Spacing.LINEAR,
                 fast_density_increase=False):
        if max_iterations < 1:
            raise ValueError(f"Need at least one iteration, got max_iterations={max_iterations}")
        if initial_nstep < 1:
            raise ValueError(f"Need at least 3 points per axis, got initial_nstep={initial_nstep}")
        if not max_error > 0:
            raise ValueError(f"Maximal error must be positive, got max_error={max_error}")
        self.max_iterations = max_iterations
        self.initial_nstep = initial_nstep
        self.max_error = max_error
        self.spacing = spacing
        self.fast_density_increase = fast_density_increase

    @classmethod
    def from_registry(cls, registry: typing.Mapping[str, typing.Any]) -> "Simpson2D":
        """Create from named options, as they appear in a configuration file."""
        try:
            in_loge = bool(registry["in-loge"])
            return cls(
                max_iterations=int(registry["max-iterations"]),
                initial_nstep=int(registry["initial-nstep"]),
                max_error=float(registry["max-error"]),
                spacing=Spacing.LOGE if in_loge else Spacing.LINEAR,
                fast_density_increase=bool(registry.get("fast-density-increase", False)),
            )
        except KeyError as err:
            raise KeyError(f"Missing integrator option {err}") from err

    def integrate(self, field: ScalarField, limits: Limits) -> float:
        return self.run(field, limits).value

    def run(self, field: ScalarField, limits: Limits) -> IntegrationReport:
        n = self.initial_nstep
        nb_points = simpson_count(n)
        function_map = FunctionMap(Grid.from_limits(limits, nb_points, self.spacing))

        history: list[IterationRecord] = []
        nb_evaluations = 0
        sum_old = None
        sum_new = float("nan")
        err = float("inf")

        for count in range(self.max_iterations):
            # the first pass samples the initial grid, later passes refine it
            if count > 0:
                if self.fast_density_increase:
                    # increase the grid density fast - all dimensions simultaneously
                    n += 1
                    nb_points = simpson_count(n)
                    function_map.increase_grid_density(nb_points)
                else:
                    # increase the grid density slowly - 1 dimension at a time
                    idim = (count - 1) % Grid.nb_spatial_dims
                    if idim == 0:
                        n += 1
                        nb_points = simpson_count(n)
                    function_map.increase_grid_density(nb_points, idim)

            grid = function_map.grid
            logger.info(f"Integration: iter = {count}, using grid: {grid}")

            nb_new = self.fill_function_map(field, function_map)
            nb_evaluations += nb_new

            sum_new = simpson_rule(function_map)
            record = IterationRecord(count, grid.nb_points, nb_new, sum_new, previous=sum_old)
            history.append(record)

            if sum_old is None:
                logger.info(f"Integral = {sum_new} (baseline)")
                sum_old = sum_new
                continue

            if sum_new + sum_old == 0:
                record.error = 0.
                logger.info(f"Integral = 0 (prev = {sum_old}), vanishing integral")
                return IntegrationReport(0., 0., count + 1, nb_evaluations, grid.nb_points, history, function_map)

            err = 200 * abs((sum_new - sum_old) / (sum_new + sum_old))  # in %
            record.error = err
            logger.info(f"Integral = {sum_new} (prev = {sum_old}) / Estimated err = {err} %")

            if err < self.max_error:
                logger.info(f"Notice: Integral = {sum_new} / Estimated err = {err} %")
                return IntegrationReport(sum_new, err, count + 1, nb_evaluations, grid.nb_points, history,
                                         function_map)
            sum_old = sum_new

        nb_points_reached = function_map.grid.nb_points
        logger.error(f"Maximum numerical error allowed = {self.max_error} %")
        logger.critical("Integral didn't converge to required numerical accuracy")
        logger.critical(f"Estimated Error = {err} % - Aborting @ {nb_points_reached} integration steps")
        raise NonConvergenceError(err, self.max_error, nb_points_reached, sum_new, history)

    def fill_function_map(self, field: ScalarField, function_map: FunctionMap) -> int:
        """Evaluate the field on every grid point without a value; return the number of evaluations."""
        grid = function_map.grid
        [n0, n1] = grid.nb_points
        nb_new = 0
        for i in range(n0):
            x0 = grid.coordinate(0, i)
            for j in range(n1):
                x1 = grid.coordinate(1, j)

                if function_map.value_is_set((i, j)):
                    logger.debug("grid point....%d,%d/%d,%d : func at (x = %g, %g) computed at previous step",
                                 i, j, n0, n1, x0, x1)
                    continue

                y = float(field(x0, x1))
                logger.debug("grid point....%d,%d/%d,%d : func(x = %g, %g) = %g", i, j, n0, n1, x0, x1, y)
                # with points uniform in ln(x): integral { f(x)dx } = integral { x*f(x) dln(x) }
                if self.spacing is Spacing.LOGE:
                    y *= x0 * x1

                function_map.set_value(y, (i, j))
                nb_new += 1
        return nb_new
