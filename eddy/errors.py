"""
Error types for the eddy-current compensation library

Fatal input problems (bad configuration, empty or malformed data, unreadable
sources) and the non-fatal snapshot write failure are kept as distinct types
so callers can treat them differently.
"""


class EddyError(Exception):
    """Base class for all errors raised by this package"""


class ConfigurationError(EddyError, ValueError):
    """Malformed or missing run configuration (e.g. iteration count)"""


class EmptyWaveform(EddyError, ValueError):
    """A waveform with no samples was supplied"""


class InvalidModel(EddyError, ValueError):
    """Eddy-current model with no modes or mismatched amplitude/rate lengths"""


class SourceReadError(EddyError, OSError):
    """An input file could not be read"""


class ParameterFileError(SourceReadError):
    """Parameter file unreadable or contains no (amplitude, rate) pairs"""


class WaveformFileError(SourceReadError):
    """Gradient waveform file unreadable"""


class SnapshotWriteError(EddyError, OSError):
    """Snapshot of the working waveform could not be written"""
