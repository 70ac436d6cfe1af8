import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from simpson2d.numeric import Simpson2D
from simpson2d.visualising import plot_convergence, plot_sample_points


def test_plot_convergence():
    report = Simpson2D(max_iterations=20, max_error=1e-4).run(lambda x0, x1: np.exp(x0 * x1), [(0., 1.), (0., 1.)])
    fig, ax = plt.subplots()
    ax_err = plot_convergence(ax, report)
    [line] = ax.get_lines()
    assert len(line.get_xdata()) == report.nb_iterations
    # no error estimate for the baseline
    [err_line] = ax_err.get_lines()
    assert len(err_line.get_xdata()) == report.nb_iterations - 1
    plt.close(fig)


def test_plot_sample_points():
    report = Simpson2D(max_iterations=20, max_error=1e-2).run(lambda x0, x1: x0 + x1, [(0., 1.), (0., 2.)])
    [n0, n1] = report.nb_points
    fig, ax = plt.subplots()
    image = plot_sample_points(ax, report.function_map)
    assert image.get_offsets().shape == (n0 * n1, 2)
    assert ax.get_title() == f"{n0} x {n1} points"
    plt.close(fig)
