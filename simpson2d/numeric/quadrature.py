import logging

import numpy as np

from simpson2d.domain import Grid, FunctionMap


logger = logging.getLogger(__name__)


def integrate_on_grid(grid: Grid, values: np.ndarray) -> float:
    """Composite Simpson rule in 2D as the tensor product of the 1D rule.

    Terms are accumulated one by one in grid order, endpoints first, so the
    rounding of the sum does not depend on how numpy would pair them up.
    """
    [n0, n1] = grid.nb_points
    [step0, step1] = grid.steps
    assert values.shape == (n0, n1)
    logger.debug(f"DIM: 0 -> N = {n0}, dx = {step0}")
    logger.debug(f"DIM: 1 -> N = {n1}, dx = {step1}")

    # 1D integral along axis 1, for each point on axis 0
    sum1d = []
    for row in values.tolist():
        row_sum = 0.
        row_sum += 0.5 * row[0]
        row_sum += 0.5 * row[n1 - 1]
        for j in range(1, n1 - 1):
            row_sum += row[j] * (j % 2 + 1)
        row_sum *= (2. * step1 / 3.)
        sum1d.append(row_sum)

    # then along axis 0
    sum2d = (sum1d[0] + sum1d[n0 - 1]) / 2.
    for i in range(1, n0 - 1):
        sum2d += sum1d[i] * (i % 2 + 1)
    sum2d *= (2. * step0 / 3.)
    return sum2d


def simpson_rule(function_map: FunctionMap) -> float:
    return integrate_on_grid(function_map.grid, function_map.values)
