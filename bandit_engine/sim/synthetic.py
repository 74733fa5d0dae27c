"""Synthetic reward environment for exercising bandit engines."""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Generic, List, Mapping, Optional, Tuple

import numpy as np

from bandit_engine.identity import A
from bandit_engine.strategies.base import BaseBandit


class RewardEnv(Generic[A]):
    """Hidden per-arm mean rewards observed through Gaussian noise.

    ``noise=0`` makes every pull return the arm's mean exactly, which is how
    the deterministic annealing scenarios (e.g. means 98/100/99/98.5) are
    replayed.  ``rng_seed`` fixes the noise sequence.
    """

    def __init__(
        self,
        means: Mapping[A, float],
        noise: float = 1.0,
        rng_seed: Optional[int] = None,
    ) -> None:
        if noise < 0:
            raise ValueError(f"noise must be >= 0, got {noise}")
        self.means: Dict[A, float] = {arm: float(mean) for arm, mean in means.items()}
        self.noise = noise
        self.best_arm = max(self.means, key=self.means.__getitem__)
        self._rng = np.random.default_rng(rng_seed)

    @property
    def arms(self) -> List[A]:
        return list(self.means)

    def pull(self, arm: A) -> float:
        mean = self.means[arm]
        if self.noise == 0:
            return mean
        return float(self._rng.normal(mean, self.noise))

    def regret(self, arm: A) -> float:
        """Expected reward lost by pulling *arm* instead of :attr:`best_arm`."""
        return self.means[self.best_arm] - self.means[arm]


def run_simulation(
    bandit: BaseBandit[A],
    env: RewardEnv[A],
    n_rounds: int,
) -> Tuple[List[float], List[float]]:
    """Run an engine against a synthetic environment with combined updates.

    Returns
    -------
    cumulative_regrets : list[float]
        Cumulative regret after each round.
    cumulative_rewards : list[float]
        Cumulative reward after each round.
    """
    cumulative_regret = 0.0
    cumulative_reward = 0.0
    regrets: List[float] = []
    rewards: List[float] = []

    for _ in range(n_rounds):
        arm = bandit.select_arm()
        reward = env.pull(arm)
        bandit.update(arm, reward)

        cumulative_regret += env.regret(arm)
        cumulative_reward += reward
        regrets.append(cumulative_regret)
        rewards.append(cumulative_reward)

    return regrets, rewards


def run_split_simulation(
    bandit: BaseBandit[A],
    env: RewardEnv[A],
    n_rounds: int,
    delay: int = 1,
) -> Tuple[List[float], List[float]]:
    """Like :func:`run_simulation`, but rewards arrive *delay* rounds late.

    Each pull is counted with ``update_counts`` as soon as it is chosen and
    its reward applied with ``update_rewards`` *delay* rounds later, the way
    a host with slow feedback would drive the engine.  Pending rewards are
    flushed after the last round.
    """
    if delay < 0:
        raise ValueError(f"delay must be >= 0, got {delay}")

    pending: Deque[Tuple[A, float]] = deque()
    cumulative_regret = 0.0
    cumulative_reward = 0.0
    regrets: List[float] = []
    rewards: List[float] = []

    for _ in range(n_rounds):
        arm = bandit.select_arm()
        bandit.update_counts(arm)
        reward = env.pull(arm)
        pending.append((arm, reward))
        while len(pending) > delay:
            done_arm, done_reward = pending.popleft()
            bandit.update_rewards(done_arm, done_reward)

        cumulative_regret += env.regret(arm)
        cumulative_reward += reward
        regrets.append(cumulative_regret)
        rewards.append(cumulative_reward)

    while pending:
        done_arm, done_reward = pending.popleft()
        bandit.update_rewards(done_arm, done_reward)

    return regrets, rewards
