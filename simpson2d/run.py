"""
Black-box integration runs.

Provides run_integration() and run_sweep() - config and integrand in, reports out.
Helper functions translate config to primitives.
"""

import dataclasses
import json
import logging
from typing import Any

from simpson2d.config import Config, save_config, expand_sweeps, count_sweep_combinations
from simpson2d.numeric import IntegrationReport, ScalarField, Simpson2D
from simpson2d.runtime.dirs import RunDir, register_run
from simpson2d.runtime.logging import switch_log_file


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers: config -> primitives
# -----------------------------------------------------------------------------

def create_integrator_from_config(config: Config) -> Simpson2D:
    """
    Create the integrator from the [integrator] section.

    Options keep their registry names:
    - max-iterations -> max_iterations
    - initial-nstep -> initial_nstep
    - max-error -> max_error
    - in-loge -> spacing
    - fast-density-increase -> fast_density_increase (optional)
    """
    return Simpson2D.from_registry(config.integrator)


def get_limits_from_config(config: Config) -> list[tuple[float, float]]:
    """Integration limits as [(lower0, upper0), (lower1, upper1)]."""
    if "limits" not in config.domain:
        raise KeyError("Missing domain option 'limits'")
    return [(float(lower), float(upper)) for [lower, upper] in config.domain["limits"]]


def save_report(report: IntegrationReport, path) -> None:
    with open(path, "w", encoding="utf-8") as fp:
        # the sample cache stays in memory, only the numbers are saved
        data = dataclasses.asdict(dataclasses.replace(report, function_map=None))
        data.pop("function_map")
        json.dump(data, fp, indent=2)


def load_report(path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as fp:
        return json.load(fp)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def run_integration(config: Config, field: ScalarField, run_dir: RunDir | None = None) -> IntegrationReport:
    """
    Integrate a field over the configured domain.

    Parameters
    ----------
    config : Config
        Integrator options and integration limits.
    field : ScalarField
        The integrand, f(x0, x1).
    run_dir : RunDir, optional
        If given, the report is saved in its results folder.

    Returns
    -------
    IntegrationReport
        The converged value with its convergence history.

    Raises
    ------
    NonConvergenceError
        The required accuracy is not reached. Not to be retried with the same config.
    """
    integrator = create_integrator_from_config(config)
    limits = get_limits_from_config(config)

    report = integrator.run(field, limits)
    logger.info(f"Integral = {report.value} after {report.nb_iterations} iterations "
                f"and {report.nb_evaluations} function evaluations")

    if run_dir is not None:
        save_report(report, run_dir.report_file)
        run_dir.update_metadata({"value": report.value, "error_percent": report.error})
    return report


def run_sweep(config: Config, field: ScalarField, run_dir: RunDir) -> list[IntegrationReport]:
    """
    Run integration(s) from config, handling sweeps if present.

    If config has no sweeps, runs a single integration.
    If config has sweeps, expands and runs each in a subdirectory.

    Parameters
    ----------
    config : Config
        Configuration, possibly with sweep definitions.
    field : ScalarField
        The integrand shared by all runs.
    run_dir : RunDir
        Base run directory. Sub-runs will be created in intermediate_dir.

    Returns
    -------
    list[IntegrationReport]
        One report per run.
    """
    nb_configs = count_sweep_combinations(config)

    if nb_configs == 1:
        switch_log_file(run_dir.log_file)
        return [run_integration(config, field, run_dir)]

    reports = []
    for index, expanded_config in enumerate(expand_sweeps(config)):
        sub_run = register_run(run_dir.intermediate_dir, __file__, with_hash=False)
        switch_log_file(sub_run.log_file)

        logger.info(f"Run #{index + 1} of {nb_configs} runs.")

        # Save expanded config for reproducibility
        save_config(expanded_config, sub_run.parameters_dir / "config.toml")

        reports.append(run_integration(expanded_config, field, sub_run))

    return reports
