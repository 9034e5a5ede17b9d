"""batch.py

Repeated Monty Hall trials and their per-strategy win/lose proportions.

Each trial is played by :func:`environments.monty_hall.game.play_game`, which
scores *stay* and *switch* against the same game. The runner collects the
2N trial results in order (trial, then stay before switch) and summarises
them as a row-normalised 2x2 table.

Example:
    >>> from simulation.batch import play_n_games, proportion_table
    >>> results = play_n_games(n=1_000, rng=42)
    >>> len(results)
    2000
    >>> print(proportion_table(results))
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from loguru import logger

from environments.monty_hall.errors import InvalidTrialCount
from environments.monty_hall.game import TrialResult, play_game
from environments.monty_hall.state import Outcome, Strategy
from simulation.common import has_converged

STRATEGIES: tuple[Strategy, ...] = tuple(Strategy)
OUTCOMES: tuple[Outcome, ...] = tuple(Outcome)

# Column order of the printed table, alphabetical like R's table()
_DISPLAY_OUTCOMES = (Outcome.LOSE, Outcome.WIN)

log = logger.bind(component="batch")


@dataclass(slots=True)
class SimulationConfig:
    """Settings for :func:`run_simulation`.

    Attributes:
        n_trials (int): Number of games to play. Each game yields one stay and one switch result.
        seed (int | None): RNG seed for reproducibility. ``None`` draws fresh entropy.
        precision (int): Decimal places the proportion table is rounded to.
        log_interval (int): Log running win rates every ``log_interval`` trials. ``0`` disables it.
    """
    n_trials: int = 100
    seed: int | None = None
    precision: int = 2
    log_interval: int = 0


@dataclass(frozen=True, slots=True, eq=False)
class ProportionTable:
    """Win/lose proportions per strategy.

    Attributes:
        counts (np.ndarray): ``(2, 2)`` integer counts, rows in :data:`STRATEGIES`
            order and columns in :data:`OUTCOMES` order.
        proportions (np.ndarray): ``counts`` normalised by row total and rounded.
        precision (int): number of decimals ``proportions`` is rounded to.
    """
    counts: np.ndarray
    proportions: np.ndarray
    precision: int

    @property
    def n_trials(self) -> int:
        """Number of trials summarised (each strategy row holds one result per trial)."""
        return int(self.counts.sum(axis=1).max())

    def proportion(self, strategy: Strategy, outcome: Outcome) -> float:
        return float(self.proportions[STRATEGIES.index(strategy), OUTCOMES.index(outcome)])

    def __str__(self) -> str:
        width = max(self.precision + 3, 5)
        header = "strategy " + " ".join(f"{o.value:>{width}}" for o in _DISPLAY_OUTCOMES)
        rows = [
            f"{s.value:<8} " + " ".join(
                f"{self.proportion(s, o):>{width}.{self.precision}f}" for o in _DISPLAY_OUTCOMES
            )
            for s in STRATEGIES
        ]
        return "\n".join([header, *rows])


def _check_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)) or precision < 0:
        raise ValueError(f"Invalid precision {precision!r}, expected a non-negative integer.")


def proportion_table(results: Sequence[TrialResult], precision: int = 2) -> ProportionTable:
    """Group results by strategy, count outcomes and normalise each row.

    Args:
        results (Sequence[TrialResult]): a batch result.
        precision (int, optional): decimals to round to. Defaults to ``2``.

    Raises:
        ValueError: if ``precision`` is negative, ``results`` is empty or a strategy has no results.

    Returns:
        ProportionTable: each row sums to 1.0 up to rounding.
    """
    _check_precision(precision)
    if not results:
        raise ValueError("Cannot summarise an empty batch result.")

    counts = np.zeros((len(STRATEGIES), len(OUTCOMES)), dtype=np.int64)
    for result in results:
        counts[STRATEGIES.index(result.strategy), OUTCOMES.index(result.outcome)] += 1

    totals = counts.sum(axis=1, keepdims=True)
    if np.any(totals == 0):
        missing = [s.value for s, t in zip(STRATEGIES, totals[:, 0]) if t == 0]
        raise ValueError(f"No trial results for strategy {', '.join(missing)}.")

    proportions = np.round(counts / totals, precision)
    return ProportionTable(counts=counts, proportions=proportions, precision=precision)


def play_n_games(
    n: int = 100,
    rng: np.random.Generator | int | None = None,
    *,
    precision: int = 2,
    log_interval: int = 0,
) -> list[TrialResult]:
    """Play ``n`` independent games and collect both strategies' results.

    Args:
        n (int, optional): number of trials. Defaults to ``100``.
        rng (np.random.Generator | int | None, optional): generator, seed, or
            ``None`` for fresh entropy. Defaults to ``None``.
        precision (int, optional): decimals of the logged proportion table. Defaults to ``2``.
        log_interval (int, optional): log running win rates every ``log_interval``
            trials, ``0`` disables it. Defaults to ``0``.

    Raises:
        InvalidTrialCount: if ``n`` is not a positive integer.
        ValueError: if ``precision`` is negative.

    Returns:
        list[TrialResult]: ``2 * n`` results, in trial order with stay before switch.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
        raise InvalidTrialCount(n)
    _check_precision(precision)

    rng = np.random.default_rng(rng)
    results: list[TrialResult] = []
    wins = dict.fromkeys(STRATEGIES, 0)

    for trial_idx in range(int(n)):
        game_results = play_game(rng)
        results.extend(game_results)

        if log_interval:
            for result in game_results:
                wins[result.strategy] += result.outcome is Outcome.WIN
            if (trial_idx + 1) % log_interval == 0:
                log.info(
                    "Trial {idx:>6d} | stay: {stay:.3f} | switch: {switch:.3f}",
                    idx=trial_idx + 1,
                    stay=wins[Strategy.STAY] / (trial_idx + 1),
                    switch=wins[Strategy.SWITCH] / (trial_idx + 1),
                )

    table = proportion_table(results, precision)
    log.info("Win/lose proportions after {n} trials\n{table}", n=n, table=table)
    if has_converged(table):
        log.success("Win proportions agree with theory (stay 1/3, switch 2/3)")

    return results


def run_simulation(config: SimulationConfig | None = None) -> tuple[list[TrialResult], ProportionTable]:
    """Run a batch from a config (defaults when ``None``) and return the results with their summary."""
    if config is None:
        config = SimulationConfig()
    results = play_n_games(
        config.n_trials,
        config.seed,
        precision=config.precision,
        log_interval=config.log_interval,
    )
    return results, proportion_table(results, config.precision)
