"""game.py

Single-trial Monty Hall game logic on three fixed doors.

A trial is built from five small steps, each a plain function so it can be
checked on its own:

    create_game -> select_door -> open_goat_door -> change_door -> determine_winner

and :func:`play_game` composes them, evaluating *both* strategies against the
same game, so every trial yields a paired (stay, switch) comparison.

All randomness comes from an explicit :class:`numpy.random.Generator`.

Example:
    >>> import numpy as np
    >>> rng = np.random.default_rng(0)
    >>> stay, switch = play_game(rng)
    >>> stay.outcome is not switch.outcome
    True
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InvalidDoorPosition
from .state import DoorLabel, Outcome, Strategy

DOORS: tuple[int, ...] = (0, 1, 2)

GameAssignment = tuple[DoorLabel, DoorLabel, DoorLabel]


@dataclass(frozen=True, slots=True)
class TrialResult:
    """One strategy's outcome for one trial."""

    strategy: Strategy
    outcome: Outcome


def _check_door(door) -> int:
    """Return ``door`` as a plain int, or raise if it is not one of :data:`DOORS`."""
    if isinstance(door, bool) or not isinstance(door, (int, np.integer)):
        raise InvalidDoorPosition(door)
    if int(door) not in DOORS:
        raise InvalidDoorPosition(door)
    return int(door)


def car_door(game: GameAssignment) -> int:
    """Door position hiding the car."""
    return game.index(DoorLabel.CAR)


# ──────────────────────────────────────────────────────────────────────────────── #
#                                  Game steps                                      #
# ──────────────────────────────────────────────────────────────────────────────── #
def create_game(rng: np.random.Generator) -> GameAssignment:
    """Hide one car and two goats behind the three doors.

    Args:
        rng (np.random.Generator): source of randomness.

    Returns:
        GameAssignment: a uniform random permutation of (goat, goat, car).
    """
    labels = rng.permutation([DoorLabel.GOAT, DoorLabel.GOAT, DoorLabel.CAR])
    return tuple(DoorLabel(int(label)) for label in labels)


def select_door(rng: np.random.Generator) -> int:
    """Contestant's first pick, uniform over the three doors."""
    return int(rng.integers(len(DOORS)))


def open_goat_door(game: GameAssignment, a_pick: int, rng: np.random.Generator) -> int:
    """The host opens a goat door that the contestant did not pick.

    If the contestant is standing on the car, both other doors hide goats and
    the host picks one of them at random. Otherwise exactly one other door is
    a goat and the host has no choice.

    Args:
        game (GameAssignment): labels behind each door.
        a_pick (int): the contestant's initial pick.
        rng (np.random.Generator): only consumed when ``a_pick`` holds the car.

    Raises:
        InvalidDoorPosition: if ``a_pick`` is not a valid door.

    Returns:
        int: the opened door, never ``a_pick`` and always a goat.
    """
    a_pick = _check_door(a_pick)

    if game[a_pick] is DoorLabel.CAR:
        goat_doors = [d for d in DOORS if d != a_pick]
        return int(rng.choice(goat_doors))

    # Contestant holds a goat: the other goat is the only door the host may open
    (opened_door,) = [d for d in DOORS if d != a_pick and game[d] is DoorLabel.GOAT]
    return opened_door


def change_door(strategy: Strategy, opened_door: int, a_pick: int) -> int:
    """Resolve the final pick for a strategy.

    Args:
        strategy (Strategy): ``STAY`` keeps ``a_pick``, ``SWITCH`` moves to the
            only door that is neither opened nor picked.
        opened_door (int): door the host opened.
        a_pick (int): the contestant's initial pick.

    Raises:
        InvalidDoorPosition: if either door is invalid, or they coincide.

    Returns:
        int: the final pick.
    """
    opened_door = _check_door(opened_door)
    a_pick = _check_door(a_pick)
    if opened_door == a_pick:
        raise InvalidDoorPosition(
            opened_door, f"Opened door {opened_door} cannot be the contestant's pick."
        )

    if strategy is Strategy.STAY:
        return a_pick

    (final_pick,) = [d for d in DOORS if d not in (opened_door, a_pick)]
    return final_pick


def determine_winner(final_pick: int, game: GameAssignment) -> Outcome:
    """``WIN`` if the car is behind ``final_pick``, ``LOSE`` otherwise.

    Raises:
        InvalidDoorPosition: if ``final_pick`` is not a valid door.
    """
    final_pick = _check_door(final_pick)
    return Outcome.WIN if game[final_pick] is DoorLabel.CAR else Outcome.LOSE


# ──────────────────────────────────────────────────────────────────────────────── #
#                                 Orchestration                                    #
# ──────────────────────────────────────────────────────────────────────────────── #
def play_game(rng: np.random.Generator) -> tuple[TrialResult, TrialResult]:
    """Play one game and score both strategies against it.

    Args:
        rng (np.random.Generator): source of randomness for the whole trial.

    Returns:
        tuple[TrialResult, TrialResult]: the stay result, then the switch result.
    """
    new_game = create_game(rng)
    first_pick = select_door(rng)
    opened_door = open_goat_door(new_game, first_pick, rng)

    return tuple(
        TrialResult(strategy, determine_winner(change_door(strategy, opened_door, first_pick), new_game))
        for strategy in (Strategy.STAY, Strategy.SWITCH)
    )
