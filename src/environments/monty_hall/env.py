"""
A three-door Monty Hall environment implementation in Gymnasium, built on the same game rules as the batch simulator.
"""

from .game import DOORS, car_door, create_game, determine_winner, open_goat_door
from .state import DoorState, Outcome, Phase

from typing import Optional, Literal

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from gymnasium.envs.registration import register

_SYMBOLS = {
    DoorState.CLOSED: "[ ]",
    DoorState.GOAT: "[G]",
    DoorState.CAR: "[C]",
    DoorState.CHOSEN: "[*]",
}


class MontyHallEnv(gym.Env):
    """An interactive Monty Hall game that follows Gymnasium's API."""

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 4,
    }

    def __init__(
        self,
        *,
        render_mode: Literal["ansi"] | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialises the Monty Hall environment.

        Args:
            render_mode (Literal or None): rendering mode of the environment. Defaults to None (no rendering needed).
            seed (int or None): controls the random number generation. Note that, setting this
             will cause deterministic behaviour, mostly useful for debugging only. Defaults to None (random seed).

        Raises:
            ValueError: for an invalid render mode
        """
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'.")

        self.n_doors = len(DOORS)
        self.render_mode = render_mode

        # ─── Gym spaces ───
        # Observation/State Space: 1D NumPy vector of doors with value (0-3) from DoorState
        self.observation_space = spaces.MultiDiscrete(
            np.full(self.n_doors, len(DoorState), dtype=np.int64)
        )
        # Action Space: Discrete choice of a door
        self.action_space = spaces.Discrete(self.n_doors)

        # ─── Initial episode state ───
        self.reset(seed=seed)

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Gymnasium API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def reset(self, *, seed: Optional[int] = None, options=None):
        """Resets the environment, whenever an episode has terminated.

        Args:
            seed (Optional[int]): reset the environment with a specific seed value. Defaults to None.
            options: unused, mandated by the Gymnasium interface. Defaults to None.

        Returns:
            Pair: 1D state vector of DoorStates, and info (dict) consisting of auxiliary information from _get_info()
        """
        super().reset(seed=seed)
        self._reset_state()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        """Corresponds to env.step() in Gymnasium: the first step is the initial pick, the second the final pick.

        Args:
            action (int): the door picked.

        Raises:
            RuntimeError: if an action is performed on an already completed episode.
            ValueError: if an action ID is provided that is not valid.

        Returns:
            observation (1d Numpy): next observation of door states
            reward (float): 1.0 when the final pick reveals the car, else 0.0
            terminated (bool): whether the episode is terminated
            truncated (bool): always False, the game has exactly two steps
            info (dict): auxiliary information of episode progress from _get_info()
        """
        if self._phase is Phase.DONE:
            raise RuntimeError(
                "Episode is already completed! Call reset() to start a new one."
            )
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}.")

        reward: float = 0.0
        terminated = False

        if self._phase is Phase.AWAITING_FIRST_PICK:
            self._choose_initial(int(action))
        elif self._phase is Phase.AFTER_REVEAL:
            terminated, reward = self._choose_final(int(action))

        return self._get_obs(), reward, terminated, False, self._get_info()

    def render(self):
        """Renders the doors as a line of text, e.g. ``[ ] [*] [G]``.

        Returns:
            str | None: the text frame when render_mode is "ansi", otherwise None.
        """
        if self.render_mode is None:
            return None
        return " ".join(_SYMBOLS[DoorState(s)] for s in self._state)

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _reset_state(self):
        """Creates a fresh game behind the scenes"""
        self._state = np.full(self.n_doors, DoorState.CLOSED, dtype=np.int64)
        self._game = create_game(self.np_random)
        self._chosen_door: Optional[int] = None
        self._opened_door: Optional[int] = None
        self._phase = Phase.AWAITING_FIRST_PICK

    def _choose_initial(self, door: int) -> None:
        self._chosen_door = door
        self._state[door] = DoorState.CHOSEN

        self._opened_door = open_goat_door(self._game, door, self.np_random)
        self._state[self._opened_door] = DoorState.GOAT

        self._phase = Phase.AFTER_REVEAL

    def _choose_final(self, door: int):
        if self._state[door] not in (DoorState.CLOSED, DoorState.CHOSEN):
            raise ValueError("Final pick must be one of the remaining closed doors.")

        won = determine_winner(door, self._game) is Outcome.WIN
        self._chosen_door = door
        self._state[door] = DoorState.CAR if won else DoorState.GOAT

        self._phase = Phase.DONE
        return True, 1.0 if won else 0.0

    def _get_obs(self):
        """Returns a copy of the current state vector"""
        return self._state.copy()

    def _get_action_mask(self) -> np.ndarray:
        """Binary vector of legal doors (1 → legal), all zeros once the episode is done."""
        if self._phase is Phase.DONE:
            return np.zeros(self.n_doors, dtype=np.int8)
        legal = np.isin(self._state, (DoorState.CLOSED, DoorState.CHOSEN))
        return legal.astype(np.int8)

    def _get_info(self):
        """Provides full information of the currently running instance.

        Returns:
            dict: consisting of
              - which door hides the car,
              - the chosen and opened doors,
              - the progress step of the env,
              - and the mask of legal actions.
        """
        return {
            "car_door": car_door(self._game),
            "chosen_door": self._chosen_door,
            "opened_door": self._opened_door,
            "phase": self._phase.name,
            "action_mask": self._get_action_mask(),
        }


# Register the environment to allow usage with `gym.make``
register(
    id="MontyHall-v0",
    entry_point="environments.monty_hall.env:MontyHallEnv",
)
