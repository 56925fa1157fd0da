"""
Eddy-Current Response Model

Predicts the gradient waveform actually produced by the coil when a commanded
waveform is played through a multi-exponential eddy-current model.

Each mode behaves like a first-order RC circuit driven by the sample-to-sample
change of the commanded gradient. The observed gradient is the commanded one
minus the amplitude-weighted sum of all mode currents.
"""

import numpy as np
from typing import Sequence, Union

from .errors import EmptyWaveform
from .primitives import EddyModel, as_model, as_waveform


def eddy_effect(
    waveform,
    model: Union[EddyModel, Sequence[float]],
    rate_constants: Sequence[float] = None
) -> np.ndarray:
    """
    Compute the eddy-current contribution for every sample of a waveform

    Mode currents start at zero on every call and are updated for all modes
    at once per sample; they never outlive the call.

    Args:
        waveform: Commanded gradient samples
        model: EddyModel, or mode amplitudes if rate_constants is given
        rate_constants: Mode rate constants (only with raw amplitudes)

    Returns:
        Array of eddy effect values, same length as waveform

    Raises:
        InvalidModel: If the model is empty or amplitude/rate lengths differ
    """
    model = as_model(model, rate_constants)
    g = as_waveform(waveform, allow_empty=True)

    amplitudes = model.amplitudes
    rates = model.rate_constants

    effect = np.zeros(len(g))
    currents = np.zeros(len(amplitudes))
    prev_g = 0.0

    for t in range(len(g)):
        dg = g[t] - prev_g
        prev_g = g[t]

        currents = currents + dg - currents * rates

        # Sequential sum keeps results identical to a per-mode loop
        total = 0.0
        for c, a in zip(currents, amplitudes):
            total += c * a
        effect[t] = total

    return effect


def compute_predicted(
    waveform,
    model: Union[EddyModel, Sequence[float]],
    rate_constants: Sequence[float] = None
) -> np.ndarray:
    """
    Predict the observed gradient waveform after eddy-current distortion

    Args:
        waveform: Commanded (input) gradient samples
        model: EddyModel, or mode amplitudes if rate_constants is given
        rate_constants: Mode rate constants (only with raw amplitudes)

    Returns:
        Predicted waveform, same length as the input

    Example:
        from eddy import make_model, compute_predicted
        model = make_model([0.2], [0.5])
        compute_predicted([0, 1, 1, 1, 0, 0], model)
        # array([0.   , 0.8  , 0.9  , 0.95 , 0.175, 0.0875])
    """
    g = as_waveform(waveform, allow_empty=True)
    return g - eddy_effect(g, model, rate_constants)


def max_abs_deviation(desired, predicted) -> float:
    """
    Convergence metric: maximum absolute difference between two waveforms

    Non-finite samples propagate into the result.
    """
    desired = as_waveform(desired, allow_empty=True)
    predicted = as_waveform(predicted, allow_empty=True)

    if len(desired) == 0:
        raise EmptyWaveform("Cannot compute deviation of an empty waveform")
    if len(desired) != len(predicted):
        raise ValueError(f"Waveform lengths differ: {len(desired)} != {len(predicted)}")

    return float(np.max(np.abs(desired - predicted)))
