"""
Eddy-current model primitives

This module provides the data types describing an eddy-current model:
- EddyMode: one exponential decay component (amplitude, rate constant)
- EddyModel: ordered, immutable collection of modes

Each type has an associated "make_*" factory function that validates its
input. Waveforms are plain 1-D float64 numpy arrays (unit time step).
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

from .errors import EmptyWaveform, InvalidModel

logger = logging.getLogger(__name__)


# =============================================================================
# Model Dataclasses
# =============================================================================

@dataclass(frozen=True)
class EddyMode:
    """
    One exponential eddy-current component

    Attributes:
        amplitude: Coupling strength of the mode (signed)
        rate_constant: Per-sample decay factor, stable in (0, 1]
    """
    amplitude: float
    rate_constant: float

    @property
    def is_stable(self) -> bool:
        """True if the discrete decay is physically plausible"""
        return 0 < self.rate_constant <= 1


@dataclass(frozen=True)
class EddyModel:
    """
    Multi-exponential eddy-current model

    Modes are fixed at construction and never mutated afterwards.

    Example:
        model = make_model([0.2, 0.05], [0.5, 0.01])
        print(model.amplitudes, model.rate_constants)
    """
    modes: Tuple[EddyMode, ...]

    def __post_init__(self):
        if len(self.modes) == 0:
            raise InvalidModel("Eddy-current model needs at least one mode")

    def __len__(self) -> int:
        return len(self.modes)

    def __iter__(self):
        return iter(self.modes)

    @property
    def amplitudes(self) -> np.ndarray:
        """Mode amplitudes as a read-only array"""
        arr = np.array([m.amplitude for m in self.modes], dtype=float)
        arr.setflags(write=False)
        return arr

    @property
    def rate_constants(self) -> np.ndarray:
        """Mode rate constants as a read-only array"""
        arr = np.array([m.rate_constant for m in self.modes], dtype=float)
        arr.setflags(write=False)
        return arr

    def __repr__(self) -> str:
        pairs = ', '.join(f'({m.amplitude:g}, {m.rate_constant:g})' for m in self.modes)
        return f"EddyModel({len(self.modes)} modes: {pairs})"


# =============================================================================
# Factory Functions
# =============================================================================

def make_model(
    amplitudes: Sequence[float],
    rate_constants: Sequence[float]
) -> EddyModel:
    """
    Create an eddy-current model from parallel amplitude and rate sequences

    Rate constants outside (0, 1] are accepted but logged, since they give an
    unstable or oscillating discrete decay.

    Args:
        amplitudes: Amplitude of each mode
        rate_constants: Per-sample decay factor of each mode

    Returns:
        EddyModel object

    Raises:
        InvalidModel: If the sequences are empty or differ in length
    """
    amplitudes = np.asarray(amplitudes, dtype=float).ravel()
    rate_constants = np.asarray(rate_constants, dtype=float).ravel()

    if len(amplitudes) != len(rate_constants):
        raise InvalidModel(
            f"Amplitude and rate constant counts differ: "
            f"{len(amplitudes)} != {len(rate_constants)}"
        )
    if len(amplitudes) == 0:
        raise InvalidModel("Eddy-current model needs at least one mode")

    modes = tuple(EddyMode(float(a), float(r)) for a, r in zip(amplitudes, rate_constants))

    for i, mode in enumerate(modes):
        if not mode.is_stable:
            logger.warning(f"Mode {i} rate constant {mode.rate_constant} is outside (0, 1]")

    return EddyModel(modes=modes)


def make_mode(amplitude: float, rate_constant: float) -> EddyMode:
    """Create a single eddy-current mode"""
    return EddyMode(float(amplitude), float(rate_constant))


def model_from_pairs(pairs: Iterable[Tuple[float, float]]) -> EddyModel:
    """Create a model from (amplitude, rate_constant) pairs"""
    pairs = list(pairs)
    return make_model([p[0] for p in pairs], [p[1] for p in pairs])


def as_model(
    model: Union[EddyModel, Sequence[float]],
    rate_constants: Sequence[float] = None
) -> EddyModel:
    """Return `model` unchanged, or build one from raw amplitude/rate sequences"""
    if isinstance(model, EddyModel):
        return model
    if rate_constants is None:
        raise InvalidModel("Rate constants are required when amplitudes are given")
    return make_model(model, rate_constants)


# =============================================================================
# Utility Functions
# =============================================================================

def as_waveform(samples, allow_empty: bool = False) -> np.ndarray:
    """
    Coerce samples to a 1-D float64 waveform array (always a copy)

    Raises:
        EmptyWaveform: If there are no samples and allow_empty is False
    """
    waveform = np.array(samples, dtype=float).ravel()
    if len(waveform) == 0 and not allow_empty:
        raise EmptyWaveform("Waveform has no samples")
    return waveform
