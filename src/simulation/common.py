from math import sqrt

from environments.monty_hall.state import Outcome, Strategy

# Probability of winning the car under each strategy
THEORETICAL_WIN_RATE: dict[Strategy, float] = {
    Strategy.STAY: 1 / 3,
    Strategy.SWITCH: 2 / 3,
}


def tolerance(n: int, p: float, z: float = 3.0) -> float:
    """Half-width of a normal-approximation band around a win rate ``p`` after ``n`` trials.

    Args:
        n (int): number of trials.
        p (float): expected win rate.
        z (float, optional): number of standard errors. Defaults to ``3.0``.

    Returns:
        float: ``z * sqrt(p * (1 - p) / n)``, shrinking with ``sqrt(n)``.
    """
    if n <= 0:
        raise ValueError(f"n must be positive, got {n!r}.")
    return z * sqrt(p * (1 - p) / n)


def has_converged(table, z: float = 3.0) -> bool:
    """Return ``True`` if both strategies' win rates sit within tolerance of theory.

    Args:
        table (ProportionTable): summary of a batch run.
        z (float, optional): number of standard errors allowed. Defaults to ``3.0``.

    Returns:
        bool: ``True`` when every strategy's WIN proportion is within
        ``max(tolerance, rounding step)`` of :data:`THEORETICAL_WIN_RATE`.
    """
    rounding_step = 10.0 ** -table.precision
    for strategy, expected in THEORETICAL_WIN_RATE.items():
        band = max(tolerance(table.n_trials, expected, z), rounding_step)
        if abs(table.proportion(strategy, Outcome.WIN) - expected) > band:
            return False
    return True
