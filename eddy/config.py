"""
Run configuration for the compensation iterator
"""

import numbers
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_ITERATIONS = 10


@dataclass
class CompensationConfig:
    """
    Options controlling a compensation run

    Attributes:
        iterations: Number of correction rounds R (>= 0)
        verbose: Report every intermediate round, not only round 0 and the last
        output_path: If set, the working waveform is written here after each round
        keep_history: Keep a copy of the working waveform after every round
    """
    iterations: int = DEFAULT_ITERATIONS
    verbose: bool = False
    output_path: Optional[str] = None
    keep_history: bool = False

    def __post_init__(self):
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, numbers.Integral):
            raise ConfigurationError(f"Iteration count must be an integer, got {self.iterations!r}")
        self.iterations = int(self.iterations)
        if self.iterations < 0:
            raise ConfigurationError(f"Iteration count must be >= 0, got {self.iterations}")
        if self.output_path == '':
            self.output_path = None


def parse_iterations(text: Optional[str]) -> int:
    """
    Parse an iteration count given on the command line

    Raises:
        ConfigurationError: If the value is missing, not an integer or negative
    """
    if text is None:
        raise ConfigurationError("Usage: -n num")
    try:
        value = int(str(text).strip())
    except ValueError:
        raise ConfigurationError(f"Invalid iteration count: {text!r}") from None
    if value < 0:
        raise ConfigurationError(f"Iteration count must be >= 0, got {value}")
    return value
