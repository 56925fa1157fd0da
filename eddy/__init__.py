"""
Eddy-Current Compensation Library
=================================

Predicts and pre-compensates eddy-current distortion of MRI gradient
waveforms using a multi-exponential eddy-current model.

Modules:
    primitives: Model building blocks (EddyMode, EddyModel)
    response: Eddy-current response model
    compensation: Iterative compensation (Compensator)
    config: Run configuration
    io: Parameter/waveform readers and snapshot writer
    waveforms: Synthetic desired waveforms
    plotting: Visualization tools

Usage:
    from eddy import make_model, compute_predicted, compensate
    from eddy import Compensator, CompensationConfig
    from eddy.io import read_parameters, read_waveform
    from eddy.plotting import CompensationPlotter
"""

from .errors import (
    EddyError,
    ConfigurationError,
    EmptyWaveform,
    InvalidModel,
    SourceReadError,
    ParameterFileError,
    WaveformFileError,
    SnapshotWriteError,
)

from .primitives import (
    EddyMode,
    EddyModel,
    make_mode,
    make_model,
    model_from_pairs,
)

from .response import compute_predicted, eddy_effect, max_abs_deviation
from .config import CompensationConfig, parse_iterations
from .compensation import (
    Compensator,
    CompensationResult,
    RoundReport,
    compensate,
    format_report,
)

__all__ = [
    # Errors
    'EddyError',
    'ConfigurationError',
    'EmptyWaveform',
    'InvalidModel',
    'SourceReadError',
    'ParameterFileError',
    'WaveformFileError',
    'SnapshotWriteError',
    # Classes
    'EddyMode',
    'EddyModel',
    'CompensationConfig',
    'Compensator',
    'CompensationResult',
    'RoundReport',
    # Functions
    'make_mode',
    'make_model',
    'model_from_pairs',
    'compute_predicted',
    'eddy_effect',
    'max_abs_deviation',
    'parse_iterations',
    'compensate',
    'format_report',
]
