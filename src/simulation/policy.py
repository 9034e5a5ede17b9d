"""policy.py

A fixed stay/switch contestant for :class:`environments.monty_hall.env.MontyHallEnv`.

Example:
    >>> import gymnasium as gym
    >>> import environments.monty_hall.env  # registers MontyHall-v0
    >>> env = gym.make("MontyHall-v0")
    >>> rewards = evaluate_policy(env, FixedStrategyPolicy(Strategy.SWITCH, seed=0), episodes=1_000)
"""
from __future__ import annotations

import gymnasium as gym
import numpy as np
from loguru import logger

from environments.monty_hall.game import change_door, select_door
from environments.monty_hall.state import Phase, Strategy


class FixedStrategyPolicy:
    """Picks a uniformly random first door, then always stays or always switches.

    Args:
        strategy (Strategy): what to do once the host has opened a goat door.
        seed (int | None): RNG seed for the first pick. ``None`` draws fresh entropy.
    """

    def __init__(self, strategy: Strategy, seed: int | None = None) -> None:
        self.strategy = strategy
        self.rng = np.random.default_rng(seed)

    def act(self, info: dict) -> int:
        """Choose a door given the environment's ``info`` dict."""
        if info["phase"] == Phase.AWAITING_FIRST_PICK.name:
            return select_door(self.rng)
        if info["phase"] == Phase.AFTER_REVEAL.name:
            return change_door(self.strategy, info["opened_door"], info["chosen_door"])
        raise RuntimeError("Episode is already completed, no action to take.")


def evaluate_policy(
    environment: gym.Env,
    policy: FixedStrategyPolicy,
    episodes: int = 100,
    *,
    seed: int | None = None,
    log_interval: int = 0,
) -> list[float]:
    """Roll the policy out for a number of episodes.

    Args:
        environment (gym.Env): a Monty Hall environment.
        policy (FixedStrategyPolicy): the contestant.
        episodes (int, optional): number of games to play. Defaults to ``100``.
        seed (int | None, optional): seeds the first reset only, later resets
            continue the environment's RNG stream. Defaults to ``None``.
        log_interval (int, optional): log the running win rate every
            ``log_interval`` episodes, ``0`` disables it. Defaults to ``0``.

    Returns:
        list[float]: final reward of each episode (1.0 for the car).
    """
    log = logger.bind(component="policy", strategy=policy.strategy.value)
    episode_rewards: list[float] = []

    for episode_idx in range(episodes):
        _, info = environment.reset(seed=seed if episode_idx == 0 else None)
        terminated = truncated = False
        reward = 0.0

        while not (terminated or truncated):
            _, reward, terminated, truncated, info = environment.step(policy.act(info))

        episode_rewards.append(float(reward))
        if log_interval and (episode_idx + 1) % log_interval == 0:
            log.info(
                "Episode {idx:>5d} | win rate: {rate:.3f}",
                idx=episode_idx + 1,
                rate=float(np.mean(episode_rewards)),
            )

    return episode_rewards
