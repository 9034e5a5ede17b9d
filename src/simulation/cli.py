"""Command-line driver: play N Monty Hall games and print the win/lose table.

    $ monty-hall -n 10000 --seed 42
"""
from __future__ import annotations

import argparse
import sys

from loguru import logger

from simulation.batch import SimulationConfig, run_simulation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monty-hall",
        description="Compare the stay and switch strategies of the Monty Hall problem by simulation.",
    )
    parser.add_argument("-n", "--trials", type=int, default=SimulationConfig().n_trials,
                        help="number of games to play (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="RNG seed, for reproducible runs")
    parser.add_argument("--precision", type=int, default=SimulationConfig().precision,
                        help="decimal places of the proportion table (default: %(default)s)")
    parser.add_argument("--log-interval", type=int, default=0,
                        help="log running win rates every K trials")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="only log warnings and errors")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    config = SimulationConfig(
        n_trials=args.trials,
        seed=args.seed,
        precision=args.precision,
        log_interval=args.log_interval,
    )
    try:
        _, table = run_simulation(config)
    except ValueError as err:
        parser.error(str(err))

    print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
