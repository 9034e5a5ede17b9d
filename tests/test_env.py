import re

import gymnasium as gym
import numpy as np
import pytest

from environments.monty_hall.env import MontyHallEnv
from environments.monty_hall.state import DoorState, Phase, Strategy
from simulation.policy import FixedStrategyPolicy, evaluate_policy


@pytest.fixture
def env():
    environment = MontyHallEnv(seed=0)
    yield environment
    environment.close()


# ─── Environment ───
def test_reset_closes_every_door(env):
    obs, info = env.reset(seed=1)
    assert obs.tolist() == [DoorState.CLOSED] * 3
    assert env.observation_space.contains(obs)
    assert info["phase"] == Phase.AWAITING_FIRST_PICK.name
    assert info["chosen_door"] is None
    assert info["opened_door"] is None
    assert info["car_door"] in (0, 1, 2)
    assert info["action_mask"].tolist() == [1, 1, 1]


def test_first_pick_reveals_a_goat(env):
    for seed in range(30):
        _, info = env.reset(seed=seed)
        obs, reward, terminated, truncated, info = env.step(0)

        opened = info["opened_door"]
        assert obs[0] == DoorState.CHOSEN
        assert obs[opened] == DoorState.GOAT
        assert opened not in (0, info["car_door"])
        assert reward == 0.0
        assert not terminated and not truncated
        assert info["phase"] == Phase.AFTER_REVEAL.name
        assert info["action_mask"][opened] == 0


def test_final_pick_on_opened_door_is_rejected(env):
    env.reset(seed=2)
    _, _, _, _, info = env.step(1)
    with pytest.raises(ValueError):
        env.step(info["opened_door"])


def test_final_pick_rewards_the_car(env):
    _, info = env.reset(seed=3)
    car = info["car_door"]
    _, _, _, _, info = env.step(car)
    obs, reward, terminated, _, info = env.step(car)
    assert reward == 1.0
    assert terminated
    assert obs[car] == DoorState.CAR
    assert info["action_mask"].tolist() == [0, 0, 0]

    with pytest.raises(RuntimeError):
        env.step(car)


def test_final_pick_on_a_goat_loses(env):
    _, info = env.reset(seed=4)
    car = info["car_door"]
    _, _, _, _, info = env.step(car)
    other = next(d for d in (0, 1, 2) if d not in (car, info["opened_door"]))
    obs, reward, terminated, _, _ = env.step(other)
    assert reward == 0.0
    assert terminated
    assert obs[other] == DoorState.GOAT


@pytest.mark.parametrize("action", [3, -1])
def test_invalid_action_is_rejected(env, action):
    with pytest.raises(ValueError):
        env.step(action)


def test_same_seed_same_game():
    first = MontyHallEnv(seed=5)
    second = MontyHallEnv(seed=5)
    for _ in range(10):
        _, info_a = first.reset()
        _, info_b = second.reset()
        assert info_a["car_door"] == info_b["car_door"]


def test_ansi_render():
    environment = MontyHallEnv(render_mode="ansi", seed=6)
    assert environment.render() == "[ ] [ ] [ ]"
    environment.step(2)
    frame = re.findall(r"\[.\]", environment.render())
    assert len(frame) == 3
    assert frame[2] == "[*]"
    assert frame.count("[G]") == 1


def test_no_render_without_mode(env):
    assert env.render() is None


def test_unsupported_render_mode():
    with pytest.raises(ValueError):
        MontyHallEnv(render_mode="human")


def test_registered_with_gymnasium():
    environment = gym.make("MontyHall-v0")
    obs, info = environment.reset(seed=0)
    assert isinstance(obs, np.ndarray)
    assert "action_mask" in info
    environment.close()


# ─── Fixed-strategy policy ───
@pytest.mark.parametrize("strategy, expected", [(Strategy.SWITCH, 2 / 3), (Strategy.STAY, 1 / 3)])
def test_policy_win_rate(strategy, expected):
    rewards = evaluate_policy(MontyHallEnv(), FixedStrategyPolicy(strategy, seed=0), episodes=3_000, seed=0)
    assert len(rewards) == 3_000
    assert np.mean(rewards) == pytest.approx(expected, abs=0.05)


def test_policy_stays_on_its_first_pick(env):
    policy = FixedStrategyPolicy(Strategy.STAY, seed=1)
    _, info = env.reset(seed=1)
    first = policy.act(info)
    _, _, _, _, info = env.step(first)
    assert policy.act(info) == first


def test_policy_has_no_action_after_the_game(env):
    policy = FixedStrategyPolicy(Strategy.SWITCH, seed=2)
    _, info = env.reset(seed=2)
    _, _, _, _, info = env.step(policy.act(info))
    _, _, terminated, _, info = env.step(policy.act(info))
    assert terminated
    with pytest.raises(RuntimeError):
        policy.act(info)
