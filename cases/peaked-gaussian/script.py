import os
import sys
import math

import matplotlib.pyplot as plt

from simpson2d.config import load_config
from simpson2d.run import run_sweep
from simpson2d.runtime.dirs import register_run
from simpson2d.runtime.logging import reset_logging
from simpson2d.visualising import plot_convergence, plot_sample_points


width = 0.3


def peaked_gaussian(x0, x1):
    return math.exp(-((x0 - 0.2)**2 + (x1 - 1.0)**2) / (2 * width**2))


def main():
    config_file = os.path.join(os.path.dirname(__file__), "config.toml")
    if len(sys.argv) > 1:
        config_file = sys.argv[1]

    reset_logging()
    config = load_config(config_file)
    run_dir = register_run("peaked-gaussian", __file__, config_file)

    reports = run_sweep(config, peaked_gaussian, run_dir)

    # the exact value, the tails outside the domain are negligible
    exact = 2 * math.pi * width**2
    fig, axs = plt.subplots(1, len(reports), figsize=(4 * len(reports), 3), squeeze=False)
    for ax, report in zip(axs[0], reports):
        plot_convergence(ax, report)
        ax.set_title(f"rel. dev. {abs(report.value / exact - 1):.1e}")
    fig.tight_layout()
    fig.savefig(run_dir.visuals_dir / "convergence.png")

    # where the last run sampled the integrand
    fig, ax = plt.subplots(figsize=(5, 4))
    image = plot_sample_points(ax, reports[-1].function_map)
    fig.colorbar(image, ax=ax)
    fig.tight_layout()
    fig.savefig(run_dir.visuals_dir / "samples.png")


if __name__ == "__main__":
    main()
