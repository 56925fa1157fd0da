"""Tests for model primitives, configuration and synthetic waveforms.

Run: python -m pytest tests/test_primitives.py -v
"""

import logging
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from eddy import (
    CompensationConfig, ConfigurationError, EddyMode, EddyModel, InvalidModel,
    make_mode, make_model, model_from_pairs, parse_iterations,
)
from eddy.primitives import as_waveform
from eddy.errors import EmptyWaveform
from eddy.waveforms import make_step, make_trapezoid


# =====================================================================
# Model
# =====================================================================

class TestModel:

    def test_make_model(self):
        model = make_model([0.2, 0.05], [0.5, 0.01])
        assert len(model) == 2
        assert model.modes[0] == EddyMode(0.2, 0.5)
        np.testing.assert_array_equal(model.amplitudes, [0.2, 0.05])
        np.testing.assert_array_equal(model.rate_constants, [0.5, 0.01])

    def test_from_pairs(self):
        assert model_from_pairs([(0.2, 0.5)]) == make_model([0.2], [0.5])

    def test_arrays_read_only(self):
        model = make_model([0.2], [0.5])
        with pytest.raises(ValueError):
            model.amplitudes[0] = 1.0

    def test_immutable(self):
        model = make_model([0.2], [0.5])
        with pytest.raises(AttributeError):
            model.modes = ()

    def test_length_mismatch(self):
        with pytest.raises(InvalidModel):
            make_model([0.1, 0.2], [0.5])

    def test_empty(self):
        with pytest.raises(InvalidModel):
            make_model([], [])
        with pytest.raises(InvalidModel):
            EddyModel(modes=())

    def test_invalid_model_is_value_error(self):
        with pytest.raises(ValueError):
            make_model([0.1], [])

    def test_unstable_rate_warns_but_accepted(self, caplog):
        with caplog.at_level(logging.WARNING, logger='eddy.primitives'):
            model = make_model([0.1, 0.1], [0.5, 1.5])
        assert len(model) == 2
        assert 'outside (0, 1]' in caplog.text
        assert not make_mode(0.1, 1.5).is_stable
        assert make_mode(0.1, 1.0).is_stable

    def test_as_waveform_copies(self):
        samples = np.array([1.0, 2.0])
        waveform = as_waveform(samples)
        waveform[0] = 5.0
        assert samples[0] == 1.0

    def test_as_waveform_empty(self):
        with pytest.raises(EmptyWaveform):
            as_waveform([])
        assert len(as_waveform([], allow_empty=True)) == 0


# =====================================================================
# Config
# =====================================================================

class TestConfig:

    def test_defaults(self):
        config = CompensationConfig()
        assert config.iterations == 10
        assert config.verbose is False
        assert config.output_path is None

    def test_numpy_integer_iterations(self):
        config = CompensationConfig(iterations=np.int64(3))
        assert config.iterations == 3
        assert type(config.iterations) is int

    @pytest.mark.parametrize("bad", [-1, 2.5, "3", True])
    def test_bad_iterations(self, bad):
        with pytest.raises(ConfigurationError):
            CompensationConfig(iterations=bad)

    def test_empty_output_path_disables_snapshot(self):
        assert CompensationConfig(output_path='').output_path is None

    def test_parse_iterations(self):
        assert parse_iterations('7') == 7
        assert parse_iterations(' 0 ') == 0

    @pytest.mark.parametrize("bad", [None, 'abc', '1.5', '-2', ''])
    def test_parse_iterations_rejects(self, bad):
        with pytest.raises(ConfigurationError):
            parse_iterations(bad)


# =====================================================================
# Synthetic waveforms
# =====================================================================

class TestWaveforms:

    def test_step(self):
        np.testing.assert_array_equal(make_step(5, 2), [0, 0, 1, 1, 1])
        np.testing.assert_array_equal(make_step(3, 0, amplitude=-2), [-2, -2, -2])

    def test_step_bad_onset(self):
        with pytest.raises(ValueError):
            make_step(5, 6)

    def test_trapezoid(self):
        waveform = make_trapezoid(1.0, rise_time=2, flat_time=3, tail=1)
        np.testing.assert_allclose(waveform, [0.5, 1, 1, 1, 1, 0.5, 0, 0])

    def test_trapezoid_delay_and_fall(self):
        waveform = make_trapezoid(2.0, rise_time=1, flat_time=1, fall_time=4, delay=2)
        assert len(waveform) == 2 + 1 + 1 + 4
        assert waveform[2] == 2.0
        assert waveform[-1] == 0.0

    def test_trapezoid_negative_timing(self):
        with pytest.raises(ValueError):
            make_trapezoid(1.0, rise_time=-1, flat_time=3)
