"""Tests for compensation plots (eddy/plotting.py).

Run: python -m pytest tests/test_plotting.py -v
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from eddy import CompensationConfig, Compensator, compensate, make_model
from eddy.plotting import CompensationPlotter, plot_compensation
from eddy.waveforms import make_trapezoid


@pytest.fixture
def result():
    desired = make_trapezoid(1.0, rise_time=3, flat_time=10, delay=2, tail=10)
    config = CompensationConfig(iterations=4, keep_history=True)
    return Compensator(desired, make_model([0.1, 0.02], [0.3, 0.05]), config).run()


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


class TestCompensationPlotter:

    def test_static_plot(self, result, tmp_path, capsys):
        path = tmp_path / 'comp.png'
        fig = CompensationPlotter(result).create_static_plot(str(path))
        assert path.exists()
        assert len(fig.axes) == 3
        assert f"Saved: {path}" in capsys.readouterr().out

    def test_individual_panels(self, result):
        plotter = CompensationPlotter(result)
        assert len(plotter.plot_before().lines) >= 2
        assert len(plotter.plot_after().lines) >= 2
        assert plotter.plot_convergence().get_yscale() == 'log'

    def test_round_animation(self, result, tmp_path):
        path = tmp_path / 'rounds.gif'
        ani = CompensationPlotter(result).create_round_animation(save_path=str(path))
        assert ani is not None
        assert path.exists()

    def test_animation_needs_history(self):
        result = compensate([0.0, 1.0, 1.0, 0.0], make_model([0.1], [0.3]), iterations=2)
        with pytest.raises(ValueError):
            CompensationPlotter(result).create_round_animation()


class TestPlotCompensation:

    def test_saves_figure(self, result, tmp_path):
        path = tmp_path / 'summary.png'
        fig = plot_compensation(result, str(path))
        assert path.exists()
        assert len(fig.axes) == 3
