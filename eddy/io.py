"""
Plain-text readers and writers

Parameter files hold whitespace-separated (amplitude, rate_constant) pairs,
one per line. Waveform files hold one sample per line. Both are read as a
stream of numbers that stops at the first token that is not a number.
"""

import logging
import numpy as np
from typing import List

from .errors import ParameterFileError, SnapshotWriteError, WaveformFileError
from .primitives import EddyModel, make_model

logger = logging.getLogger(__name__)

SNAPSHOT_MIN_DECIMALS = 7


def _read_numbers(path: str, error_cls) -> List[float]:
    """Read leading numeric tokens from a text file"""
    try:
        with open(path, 'r') as f:
            tokens = f.read().split()
    except (OSError, UnicodeDecodeError) as e:
        raise error_cls(f"Failed to open file: {path} ({e})") from e

    values = []
    for i, token in enumerate(tokens):
        try:
            values.append(float(token))
        except ValueError:
            logger.warning(f"{path}: stopped reading at non-numeric token {token!r} "
                           f"({len(tokens) - i} tokens ignored)")
            break
    return values


def read_parameters(path: str) -> EddyModel:
    """
    Load an eddy-current model from a parameter file

    Args:
        path: File of "amplitude rate_constant" lines

    Returns:
        EddyModel object

    Raises:
        ParameterFileError: If the file cannot be read or holds no pairs
    """
    values = _read_numbers(path, ParameterFileError)

    if len(values) % 2:
        logger.warning(f"{path}: ignoring unpaired trailing value {values[-1]}")
    n_pairs = len(values) // 2
    if n_pairs == 0:
        raise ParameterFileError(f"No valid parameters found in the file: {path}")

    pairs = np.array(values[:2 * n_pairs]).reshape(n_pairs, 2)
    logger.debug(f"Loaded {n_pairs} eddy-current modes from {path}")
    return make_model(pairs[:, 0], pairs[:, 1])


def read_waveform(path: str) -> np.ndarray:
    """
    Load a gradient waveform file

    An empty file gives an empty array; the compensator rejects it.

    Raises:
        WaveformFileError: If the file cannot be read
    """
    values = _read_numbers(path, WaveformFileError)
    logger.debug(f"Loaded {len(values)} waveform samples from {path}")
    return np.array(values, dtype=float)


def format_sample(value: float) -> str:
    """
    Format one sample with at least 7 decimals

    More digits are written when needed so the text reads back to the same
    float.
    """
    return np.format_float_positional(float(value), unique=True,
                                      min_digits=SNAPSHOT_MIN_DECIMALS)


def write_snapshot(path: str, waveform) -> None:
    """
    Write a waveform as one value per line, replacing the file

    Values keep at least 7 decimals and read back exactly.

    Raises:
        SnapshotWriteError: If the file cannot be written
    """
    lines = [format_sample(v) + '\n' for v in np.asarray(waveform, dtype=float).ravel()]
    try:
        with open(path, 'w') as f:
            f.writelines(lines)
    except OSError as e:
        raise SnapshotWriteError(f"Failed to open output file: {path} ({e})") from e
