"""
Compensation Plotting Module

Creates visualizations of an eddy-current compensation run using matplotlib:
- Desired vs. predicted waveform before correction
- Compensated input vs. predicted waveform after correction
- Convergence of the maximum absolute deviation per round
- Optional animation of the working waveform across rounds
"""

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from typing import Tuple
import warnings

from .compensation import CompensationResult


class CompensationPlotter:
    """
    Visualization of a compensation result

    Example:
        from eddy import compensate, make_model
        from eddy.plotting import CompensationPlotter

        result = compensate(desired, make_model([0.2], [0.5]), iterations=10)
        plotter = CompensationPlotter(result)
        plotter.create_static_plot('compensation.png')
    """

    def __init__(self, result: CompensationResult,
                 figsize: Tuple[int, int] = (12, 9)):
        """
        Initialize the plotter

        Args:
            result: CompensationResult to display
            figsize: Figure size (width, height)
        """
        self.result = result
        self.figsize = figsize
        self.t = np.arange(len(result.desired))
        self.ani = None

    def _overlay(self, ax, first, second, labels, title):
        """Plot two waveforms on one axis (second dashed)"""
        ax.plot(self.t, first, 'b-', linewidth=1, label=labels[0])
        ax.plot(self.t, second, 'r--', linewidth=1, label=labels[1])
        ax.axhline(y=0, color='k', linewidth=0.5)
        ax.set_ylabel('Gradient', fontsize=9)
        ax.set_title(title, fontsize=10)
        ax.legend(loc='upper right', fontsize=8)
        ax.grid(True, alpha=0.3)

    def plot_before(self, ax=None):
        """Desired waveform against its uncorrected eddy-current response"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(self.figsize[0], self.figsize[1] / 3))
        self._overlay(ax, self.result.desired, self.result.initial_predicted,
                      ('desired', 'predicted'),
                      f'Before correction (max dev {self.result.deviations[0]:.3g})')
        return ax

    def plot_after(self, ax=None):
        """Compensated input against its predicted response"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(self.figsize[0], self.figsize[1] / 3))
        self._overlay(ax, self.result.input, self.result.predicted,
                      ('compensated input', 'predicted'),
                      f'After {self.result.rounds} rounds '
                      f'(max dev {self.result.final_deviation:.3g})')
        return ax

    def plot_convergence(self, ax=None):
        """Maximum absolute deviation per round on a log scale"""
        if ax is None:
            fig, ax = plt.subplots(figsize=(self.figsize[0], self.figsize[1] / 3))
        deviations = np.asarray(self.result.deviations, dtype=float)
        rounds = np.arange(len(deviations))
        ax.plot(rounds, deviations, 'o-', color='darkgreen', markersize=4)
        if np.all(deviations[np.isfinite(deviations)] > 0):
            ax.set_yscale('log')
        ax.set_xlabel('Round', fontsize=9)
        ax.set_ylabel('Max |desired - predicted|', fontsize=9)
        ax.grid(True, alpha=0.3)
        return ax

    def create_static_plot(self, filename: str = None, figsize: tuple = None) -> plt.Figure:
        """
        Create a static plot of the whole run

        Args:
            filename: If provided, save to this file
            figsize: Optional figure size override

        Returns:
            matplotlib Figure object
        """
        if figsize is None:
            figsize = self.figsize

        fig, axes = plt.subplots(3, 1, figsize=figsize)
        fig.suptitle('Eddy-Current Compensation', fontsize=14, fontweight='bold')

        self.plot_before(axes[0])
        self.plot_after(axes[1])
        axes[1].set_xlabel('Sample', fontsize=9)
        self.plot_convergence(axes[2])

        plt.tight_layout()

        if filename:
            fig.savefig(filename, dpi=150, bbox_inches='tight')
            print(f"Saved: {filename}")

        return fig

    def create_round_animation(self, save_path: str = None,
                               fps: int = 2) -> animation.FuncAnimation:
        """
        Animate the working waveform round by round

        Requires a result run with keep_history enabled.

        Args:
            save_path: Output file (.gif uses Pillow, anything else FFmpeg)
            fps: Frames (rounds) per second

        Returns:
            matplotlib FuncAnimation object
        """
        history = self.result.history
        if not history:
            raise ValueError("Result has no per-round history (set keep_history=True)")

        fig, ax = plt.subplots(figsize=(self.figsize[0], self.figsize[1] / 2))
        ax.plot(self.t, self.result.desired, color='blue', alpha=0.4,
                linewidth=1, label='desired')
        line, = ax.plot([], [], 'r-', linewidth=1.5, label='input')

        lo = min(np.nanmin(h) for h in history + [self.result.desired])
        hi = max(np.nanmax(h) for h in history + [self.result.desired])
        margin = (hi - lo) * 0.1 if hi != lo else 1
        ax.set_xlim(0, max(len(self.t) - 1, 1))
        ax.set_ylim(lo - margin, hi + margin)
        ax.set_xlabel('Sample', fontsize=9)
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=8)

        round_text = ax.text(0.02, 0.95, '', transform=ax.transAxes, fontsize=10,
                             verticalalignment='top', fontfamily='monospace',
                             bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

        def init():
            line.set_data([], [])
            round_text.set_text('')
            return line, round_text

        def animate(frame):
            line.set_data(self.t, history[frame])
            round_text.set_text(f'round {frame}, max dev = '
                                f'{self.result.deviations[frame]:.3g}')
            return line, round_text

        self.ani = animation.FuncAnimation(
            fig, animate, init_func=init,
            frames=len(history), interval=1000 / fps,
            blit=True, repeat=True
        )

        if save_path is not None:
            print(f"Saving animation to {save_path}...")
            if save_path.endswith('.gif'):
                writer = animation.PillowWriter(fps=fps)
            elif animation.FFMpegWriter.isAvailable():
                writer = animation.FFMpegWriter(fps=fps)
            else:
                warnings.warn("FFmpeg not available, using Pillow for GIF output")
                save_path = save_path.rsplit('.', 1)[0] + '.gif'
                writer = animation.PillowWriter(fps=fps)

            self.ani.save(save_path, writer=writer, dpi=100)
            print(f"Animation saved to {save_path}")

        return self.ani


def plot_compensation(result: CompensationResult, output: str = None, **kwargs):
    """
    Convenience function to plot a compensation result

    Args:
        result: CompensationResult
        output: Output filename (displays if None)
        **kwargs: Additional arguments passed to create_static_plot
    """
    plotter = CompensationPlotter(result)
    fig = plotter.create_static_plot(output, **kwargs)
    if output is None:
        plt.show()
    return fig
