"""
Tests for TOML configuration loading and sweep expansion.
"""

import os
import tempfile

import pytest
import numpy as np

from simpson2d.config import (
    load_config,
    save_config,
    config_from_dict,
    expand_sweeps,
    count_sweep_combinations,
    Config,
    SweepConfig,
)


@pytest.fixture
def sample_toml_content():
    return """
[integrator]
max-iterations = 20
initial-nstep = 2
max-error = 1e-4
in-loge = false
fast-density-increase = true

[domain]
limits = [[0.0, 1.0], [-1.0, 2.0]]
"""


@pytest.fixture
def sample_toml_with_sweep(sample_toml_content):
    return sample_toml_content + """
[[sweep]]
path = "integrator.max-error"
logspace = [-1.0, -4.0, 4]
"""


@pytest.fixture
def temp_toml_file(sample_toml_content):
    with tempfile.NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(sample_toml_content)
        filepath = f.name
    yield filepath
    os.unlink(filepath)


def test_load_config(temp_toml_file):
    """Test loading a TOML config file."""
    config = load_config(temp_toml_file)

    assert isinstance(config, Config)
    assert config.integrator["max-iterations"] == 20
    assert config.integrator["initial-nstep"] == 2
    assert config.integrator["max-error"] == 1e-4
    assert config.integrator["in-loge"] is False
    assert config.integrator["fast-density-increase"] is True
    assert config.domain["limits"] == [[0.0, 1.0], [-1.0, 2.0]]
    assert config.sweeps == []


def test_missing_integrator_section():
    with pytest.raises(KeyError, match="integrator"):
        config_from_dict({"domain": {"limits": [[0, 1], [0, 1]]}})


def test_save_and_reload_config(sample_toml_with_sweep, tmp_path):
    """Test saving and reloading a config."""
    source = tmp_path / "source.toml"
    source.write_text(sample_toml_with_sweep)
    config = load_config(source)

    output_path = tmp_path / "saved.toml"
    save_config(config, output_path)
    reloaded = load_config(output_path)

    assert reloaded.integrator == config.integrator
    assert reloaded.domain == config.domain
    assert reloaded.sweeps == config.sweeps


def test_expand_sweeps_no_sweep(temp_toml_file):
    """Test expansion when no sweeps are defined."""
    config = load_config(temp_toml_file)

    expanded = list(expand_sweeps(config))
    assert len(expanded) == 1
    assert expanded[0].integrator["max-error"] == 1e-4


def test_expand_sweeps_with_logspace(sample_toml_with_sweep, tmp_path):
    """Test sweep expansion with logspace."""
    filepath = tmp_path / "sweep.toml"
    filepath.write_text(sample_toml_with_sweep)
    config = load_config(filepath)

    assert len(config.sweeps) == 1
    assert count_sweep_combinations(config) == 4

    expanded = list(expand_sweeps(config))
    assert len(expanded) == 4

    # Check the swept values
    tolerances = [c.integrator["max-error"] for c in expanded]
    np.testing.assert_allclose(tolerances, [1e-1, 1e-2, 1e-3, 1e-4])

    # Verify sweeps are removed and the original is untouched
    for c in expanded:
        assert len(c.sweeps) == 0
    assert config.integrator["max-error"] == 1e-4


def test_expand_sweeps_with_multiple_sweeps():
    """Test sweep expansion with multiple sweep parameters."""
    config = Config(
        integrator={"max-iterations": 10, "initial-nstep": 1, "max-error": 1e-3, "in-loge": False},
        domain={"limits": [[0.0, 1.0], [0.0, 1.0]]},
        sweeps=[
            SweepConfig(path="integrator.initial-nstep", linspace=[1, 3, 3]),
            SweepConfig(path="integrator.fast-density-increase", values=[False, True]),
        ],
    )

    assert count_sweep_combinations(config) == 6  # 3 * 2

    expanded = list(expand_sweeps(config))
    assert len(expanded) == 6
    assert [(c.integrator["initial-nstep"], c.integrator["fast-density-increase"]) for c in expanded] == [
        (1.0, False), (1.0, True), (2.0, False), (2.0, True), (3.0, False), (3.0, True)]
    assert "fast-density-increase" not in config.integrator


def test_sweep_without_values():
    config = Config(integrator={}, sweeps=[SweepConfig(path="integrator.max-error")])
    with pytest.raises(ValueError, match="has no values specified"):
        count_sweep_combinations(config)


def test_sweep_path_needs_key():
    config = Config(integrator={}, sweeps=[SweepConfig(path="integrator", values=[1])])
    with pytest.raises(ValueError, match="must name a key"):
        list(expand_sweeps(config))
