"""
Eddy-Current Compensation Iterator

This module provides the Compensator class, which searches for a commanded
gradient waveform whose eddy-current response matches a desired waveform.

Each round adds the previous round's prediction error to the working input
and re-simulates the response model:

    input[t] += desired[t] - predicted[t]

The iteration runs for a fixed number of rounds; there is no early exit.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .config import CompensationConfig
from .errors import SnapshotWriteError
from .io import write_snapshot
from .primitives import EddyModel, as_waveform
from .response import compute_predicted, max_abs_deviation

logger = logging.getLogger(__name__)

INITIALIZED = 'initialized'
ITERATING = 'iterating'
DONE = 'done'


@dataclass(frozen=True)
class RoundReport:
    """
    Convergence report for one round

    Attributes:
        round_index: 0 for the uncorrected waveform, then 1..R
        max_abs_deviation: max |desired - predicted| after this round
        final: True for the last round of the run
    """
    round_index: int
    max_abs_deviation: float
    final: bool = False


@dataclass
class CompensationResult:
    """
    Outcome of a compensation run

    Attributes:
        desired: Target waveform
        initial_predicted: Response to the uncorrected waveform (round 0)
        input: Compensated waveform after the last round
        predicted: Response to the compensated waveform
        deviations: Convergence metric per round, indexed by round
        history: Working waveform after each round (only with keep_history)
    """
    desired: np.ndarray
    initial_predicted: np.ndarray
    input: np.ndarray
    predicted: np.ndarray
    deviations: List[float] = field(default_factory=list)
    history: List[np.ndarray] = field(default_factory=list)

    @property
    def rounds(self) -> int:
        """Number of correction rounds performed"""
        return len(self.deviations) - 1

    @property
    def final_deviation(self) -> float:
        return self.deviations[-1]


def format_report(report: RoundReport) -> str:
    """
    Render a round report as a single line

    The final round is printed with 7 decimals, verbose intermediate rounds
    with 6, and a non-final round 0 in general format.
    """
    if report.final:
        value = f"{report.max_abs_deviation:.7f}"
    elif report.round_index == 0:
        value = f"{report.max_abs_deviation:g}"
    else:
        value = f"{report.max_abs_deviation:f}"
    return f"iteration {report.round_index}, maximum absolute deviation = {value}"


class Compensator:
    """
    Fixed-point iterator for eddy-current pre-compensation

    Owns the working input waveform. The desired waveform and the model are
    never modified.

    Example:
        from eddy import Compensator, CompensationConfig, make_model

        model = make_model([0.2], [0.5])
        comp = Compensator([0, 1, 1, 1, 0, 0], model, CompensationConfig(iterations=5))
        result = comp.run(report=lambda r: print(format_report(r)))
        print(result.input)
    """

    def __init__(self, desired, model: EddyModel,
                 config: CompensationConfig = None):
        """
        Initialize a compensator

        Args:
            desired: Target gradient waveform
            model: Eddy-current model
            config: Run options (uses defaults if None)

        Raises:
            EmptyWaveform: If desired has no samples
        """
        self.config = config or CompensationConfig()
        self.model = model

        self.desired = as_waveform(desired)
        self.desired.setflags(write=False)

        self.input: np.ndarray = self.desired.copy()
        self.predicted: Optional[np.ndarray] = None
        self.round_index = 0
        self.state = INITIALIZED
        self.result: Optional[CompensationResult] = None

        self._snapshot_enabled = self.config.output_path is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _snapshot(self):
        """Write the working waveform; failures are logged and skipped"""
        if not self._snapshot_enabled:
            return
        try:
            write_snapshot(self.config.output_path, self.input)
        except SnapshotWriteError as e:
            logger.error(f"Round {self.round_index}: {e}")
        else:
            logger.debug(f"Round {self.round_index}: snapshot written to {self.config.output_path}")

    def _emit(self, report: RoundReport, callback):
        if callback is None:
            return
        if report.round_index == 0 or report.final or self.config.verbose:
            callback(report)

    # ------------------------------------------------------------------
    # Rounds
    # ------------------------------------------------------------------

    def initialize(self, report: Callable[[RoundReport], None] = None) -> RoundReport:
        """
        Run round 0: predict the response to the uncorrected waveform

        Args:
            report: Optional callback receiving reported RoundReports

        Returns:
            RoundReport for round 0
        """
        if self.state != INITIALIZED or self.predicted is not None:
            raise RuntimeError("Compensator has already been initialized")

        self.predicted = compute_predicted(self.input, self.model)
        deviation = max_abs_deviation(self.desired, self.predicted)

        self.result = CompensationResult(
            desired=self.desired,
            initial_predicted=self.predicted.copy(),
            input=self.input,
            predicted=self.predicted,
            deviations=[deviation],
        )
        if self.config.keep_history:
            self.result.history.append(self.input.copy())

        rep = RoundReport(0, deviation, final=self.config.iterations == 0)
        logger.debug(f"Round 0: max deviation {deviation:.7g}")
        self._snapshot()
        self._emit(rep, report)

        if self.config.iterations == 0:
            self.state = DONE
        return rep

    def step(self, report: Callable[[RoundReport], None] = None) -> RoundReport:
        """
        Run one correction round

        Returns:
            RoundReport for the round just completed
        """
        if self.predicted is None:
            raise RuntimeError("Call initialize() before step()")
        if self.state == DONE:
            raise RuntimeError(f"All {self.config.iterations} rounds have already run")

        self.state = ITERATING
        self.round_index += 1

        self.input += self.desired - self.predicted
        self.predicted = compute_predicted(self.input, self.model)
        deviation = max_abs_deviation(self.desired, self.predicted)

        self.result.predicted = self.predicted
        self.result.deviations.append(deviation)
        if self.config.keep_history:
            self.result.history.append(self.input.copy())

        final = self.round_index == self.config.iterations
        rep = RoundReport(self.round_index, deviation, final=final)
        logger.debug(f"Round {self.round_index}: max deviation {deviation:.7g}")

        self._snapshot()
        self._emit(rep, report)

        if final:
            self.state = DONE
        return rep

    def run(self, report: Callable[[RoundReport], None] = None) -> CompensationResult:
        """
        Run round 0 and all configured correction rounds

        Args:
            report: Optional callback. Receives round 0, the final round and,
                with verbose enabled, every intermediate round.

        Returns:
            CompensationResult
        """
        self.initialize(report)
        while self.state != DONE:
            self.step(report)
        return self.result

    def __repr__(self) -> str:
        return (f"Compensator({len(self.desired)} samples, {len(self.model)} modes, "
                f"round {self.round_index}/{self.config.iterations}, {self.state})")


def compensate(desired, model: EddyModel, iterations: int = 10,
               verbose: bool = False, output_path: str = None,
               report: Callable[[RoundReport], None] = None) -> CompensationResult:
    """
    Convenience function to run a full compensation

    Args:
        desired: Target gradient waveform
        model: Eddy-current model
        iterations: Number of correction rounds
        verbose: Report intermediate rounds
        output_path: Optional snapshot file, rewritten after each round
        report: Optional report callback

    Returns:
        CompensationResult
    """
    config = CompensationConfig(iterations=iterations, verbose=verbose,
                                output_path=output_path)
    return Compensator(desired, model, config).run(report)
