"""
Synthetic desired waveforms

Sampled test shapes (unit time step) for trying out a model without a
waveform file: a step and a trapezoidal gradient lobe.
"""

import numpy as np


def make_step(n_samples: int, onset: int, amplitude: float = 1.0) -> np.ndarray:
    """
    Create a step waveform

    Args:
        n_samples: Total number of samples
        onset: Index of the first non-zero sample
        amplitude: Step height

    Returns:
        Waveform array
    """
    if not 0 <= onset <= n_samples:
        raise ValueError(f"Step onset {onset} outside [0, {n_samples}]")
    waveform = np.zeros(n_samples)
    waveform[onset:] = amplitude
    return waveform


def make_trapezoid(
    amplitude: float,
    rise_time: int,
    flat_time: int,
    fall_time: int = None,
    delay: int = 0,
    tail: int = 0
) -> np.ndarray:
    """
    Create a sampled trapezoidal gradient lobe

    All times are in samples. Ramps are linear and reach `amplitude` on
    their last sample.

    Args:
        amplitude: Flat-top value
        rise_time: Ramp up samples
        flat_time: Flat top samples
        fall_time: Ramp down samples, defaults to rise_time
        delay: Zero samples before the lobe
        tail: Zero samples after the lobe

    Returns:
        Waveform array of length delay + rise + flat + fall + tail
    """
    fall_time = rise_time if fall_time is None else fall_time
    if min(rise_time, flat_time, fall_time, delay, tail) < 0:
        raise ValueError("Trapezoid timings must be non-negative")

    rise = amplitude * np.arange(1, rise_time + 1) / max(rise_time, 1)
    flat = np.full(flat_time, float(amplitude))
    fall = amplitude * np.arange(fall_time - 1, -1, -1) / max(fall_time, 1)

    return np.concatenate([np.zeros(delay), rise, flat, fall, np.zeros(tail)])
