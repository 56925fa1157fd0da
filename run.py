#!/usr/bin/env python3
"""
Eddy-Current Compensation

Pre-compensate a gradient waveform for eddy-current distortion.

Usage:
    python run.py [-v] [-n num] parameter.txt gradient.txt [output.txt]

Files:
    parameter.txt  - one "amplitude rate_constant" pair per line
    gradient.txt   - desired gradient waveform, one sample per line
    output.txt     - compensated waveform, rewritten after every round

Examples:
    python run.py params.txt grad.txt
    python run.py -v -n 20 params.txt grad.txt compensated.txt --plot out.png
"""

import argparse
import logging
import os
import sys

# Add eddy package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from eddy import (
    CompensationConfig, Compensator, EddyError, ConfigurationError,
    format_report, parse_iterations
)
from eddy.io import read_parameters, read_waveform


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage problems as ConfigurationError"""

    def error(self, message):
        raise ConfigurationError(f"{message}\n{self.format_usage().strip()}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description='Eddy-current compensation of gradient waveforms',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('parameters',
                        help='Parameter file (amplitude rate_constant per line)')
    parser.add_argument('gradient',
                        help='Desired gradient waveform file')
    parser.add_argument('output', nargs='?', default=None,
                        help='Snapshot file for the compensated waveform')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Report every round')
    parser.add_argument('-n', '--iterations', default=None,
                        help='Number of correction rounds (default: 10)')
    parser.add_argument('--plot', default=None,
                        help='Save waveform/convergence plot to this file')
    parser.add_argument('--animate', default=None,
                        help='Save per-round animation to this file (.gif or .mp4)')
    parser.add_argument('--show', action='store_true',
                        help='Open an interactive plot window')
    return parser


def run(argv=None) -> int:
    """Parse arguments, run the compensation and report; raises EddyError"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    iterations = 10 if args.iterations is None else parse_iterations(args.iterations)
    want_plot = bool(args.plot or args.animate or args.show)
    config = CompensationConfig(
        iterations=iterations,
        verbose=args.verbose,
        output_path=args.output,
        keep_history=bool(args.animate),
    )

    # Load inputs (fatal on failure)
    model = read_parameters(args.parameters)
    desired = read_waveform(args.gradient)

    compensator = Compensator(desired, model, config)
    if args.verbose:
        print(f"  {model}")
        print(f"  {compensator}")

    result = compensator.run(report=lambda r: print(format_report(r)))

    if want_plot:
        import matplotlib
        if not args.show:
            matplotlib.use('Agg')
        import matplotlib.pyplot as plt
        from eddy.plotting import CompensationPlotter

        plotter = CompensationPlotter(result)
        plotter.create_static_plot(args.plot)
        if args.animate:
            # Keep reference to animation object to prevent garbage collection
            ani = plotter.create_round_animation(save_path=args.animate)
        if args.show:
            plt.show()
        plt.close('all')

    return 0


def main(argv=None) -> int:
    try:
        return run(argv)
    except EddyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
