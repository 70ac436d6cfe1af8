import numpy as np
import matplotlib.pyplot as plt

from simpson2d.domain import FunctionMap
from simpson2d.numeric import IntegrationReport


# Setup for colours
cmap_values = "plasma"
color_estimate = "C0"
color_error = "C3"


def plot_convergence(ax: plt.Axes, report: IntegrationReport):
    """Integral estimates per iteration, with the error estimate on a twin axis."""
    iterations = [record.iteration for record in report.history]
    estimates = [record.estimate for record in report.history]
    ax.plot(iterations, estimates, "o-", color=color_estimate)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Integral estimate", color=color_estimate)

    # the baseline iteration has no error estimate
    checked = [record for record in report.history if record.error is not None and record.error > 0]
    ax_err = ax.twinx()
    if len(checked):
        ax_err.semilogy([record.iteration for record in checked], [record.error for record in checked],
                        "s--", color=color_error)
    ax_err.set_ylabel("Estimated error (%)", color=color_error)
    return ax_err


def plot_sample_points(ax: plt.Axes, function_map: FunctionMap):
    """The grid points where the function has been sampled, coloured by the cached value."""
    grid = function_map.grid
    [x0, x1] = np.meshgrid(grid[0].coordinates(), grid[1].coordinates(), indexing="ij")
    values = function_map.values
    image = ax.scatter(x0.ravel(), x1.ravel(), c=values.ravel(), cmap=cmap_values, s=8)
    ax.set_xlabel("$x_0$")
    ax.set_ylabel("$x_1$")
    ax.set_title(f"{grid.nb_points[0]} x {grid.nb_points[1]} points")
    return image
