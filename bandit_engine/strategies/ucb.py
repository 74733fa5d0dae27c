"""UCB (Upper Confidence Bound) engine."""
from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from bandit_engine.config import DEFAULT_UCB_CONFIG, BanditConfig, UcbConfig
from bandit_engine.identity import A, arm_ident
from bandit_engine.state.codec import by_arm, by_ident, read_record, resolve_idents, write_record
from bandit_engine.state.records import UcbRecord
from bandit_engine.strategies.base import BaseBandit
from bandit_engine.utils import select_argmax

DEFAULT_CONFIG = DEFAULT_UCB_CONFIG


class UCB(BaseBandit[A]):
    r"""UCB with a forced exploration round.

    Until every arm has been pulled once, the first unplayed arm (in
    configured order) is returned.  Afterwards the arm with the highest index
    is chosen:

    .. math::

        \text{UCB}_i = \frac{R_i}{n_i} + \sqrt{\frac{\ln t}{n_i}}

    where :math:`R_i` is the cumulative reward of arm *i*, :math:`n_i` its
    pull count and *t* the total number of pulls.  Ties go to the earliest
    arm.  ``config.alpha`` is stored and persisted but does not enter the
    score.
    """

    name = "ucb"

    def __init__(
        self,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        config: UcbConfig = DEFAULT_CONFIG,
        *,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(arms, bandit_config, seed=seed)
        self._config = config
        self._rewards: Dict[A, float] = {arm: 0.0 for arm in self._arms}
        self._all_counts = 0
        self._all_played = False

    @classmethod
    def new_with_values(
        cls,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        config: UcbConfig,
        counts: Mapping[A, int],
        rewards: Mapping[A, float],
        *,
        seed: Optional[int] = None,
    ) -> "UCB[A]":
        """Build an engine from existing statistics; missing arms start at zero."""
        bandit = cls(arms, bandit_config, config, seed=seed)
        for arm, count in counts.items():
            bandit._require_arm(arm)
            bandit._counts[arm] = int(count)
        for arm, reward in rewards.items():
            bandit._require_arm(arm)
            bandit._rewards[arm] = float(reward)
        bandit._all_counts = sum(bandit._counts.values())
        bandit._all_played = bandit._all_counts > 0 and bandit._check_if_all_played()
        return bandit

    @classmethod
    def load_bandit(
        cls,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        path: Union[str, Path],
        **kwargs: Any,
    ) -> "UCB[A]":
        arms = list(arms)
        record = read_record(path, UcbRecord)
        resolved = resolve_idents(arms, record)
        return cls.new_with_values(
            arms,
            bandit_config,
            record.config,
            by_arm(record.counts, resolved),
            by_arm(record.rewards, resolved),
            **kwargs,
        )

    # -- read-only views ------------------------------------------------------

    @property
    def config(self) -> UcbConfig:
        return self._config

    @property
    def rewards(self) -> Dict[A, float]:
        return dict(self._rewards)

    @property
    def all_counts(self) -> int:
        return self._all_counts

    @property
    def all_played(self) -> bool:
        """True once every arm has been pulled at least once."""
        return self._all_played

    def arm_statistic(self, arm: A) -> float:
        return self._rewards[arm]

    # -- core API -------------------------------------------------------------

    def select_arm(self) -> A:
        if self._all_played:
            arm = self._calculate_best_arm()
        else:
            arm = self._next_unexplored()
        if arm is None:
            arm = self._arms[-1]
        self._log_select(arm)
        return arm

    def scores(self) -> List[float]:
        """UCB index of every arm, in configured order.

        Only meaningful once :attr:`all_played` is set.
        """
        log_total = math.log(self._all_counts)
        estimates: List[float] = []
        for arm in self._arms:
            n = self._counts[arm]
            estimates.append(self._rewards[arm] / n + math.sqrt(log_total / n))
        return estimates

    def _calculate_best_arm(self) -> Optional[A]:
        best = select_argmax(self.scores())
        return None if best is None else self._arms[best]

    def _next_unexplored(self) -> Optional[A]:
        for arm in self._arms:
            if self._counts[arm] == 0:
                return arm
        return None

    def _check_if_all_played(self) -> bool:
        return all(count > 0 for count in self._counts.values())

    def update(self, arm: A, reward: float) -> None:
        self._require_arm(arm)
        self._count_pull(arm)
        self._rewards[arm] += float(reward)
        self._log_update(arm)

    def update_counts(self, arm: A) -> None:
        self._require_arm(arm)
        self._count_pull(arm)
        self._log_update(arm)

    def update_rewards(self, arm: A, reward: float) -> None:
        self._require_arm(arm)
        self._rewards[arm] += float(reward)
        self._log_update(arm)

    def _count_pull(self, arm: A) -> None:
        self._all_counts += 1
        self._counts[arm] += 1
        if not self._all_played:
            self._all_played = self._check_if_all_played()

    # -- persistence ----------------------------------------------------------

    def save_bandit(self, path: Union[str, Path]) -> None:
        record = UcbRecord(
            config=self._config,
            arms=[arm_ident(arm) for arm in self._arms],
            counts=by_ident(self._counts),
            rewards=by_ident(self._rewards),
        )
        write_record(path, record)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UCB):
            return NotImplemented
        return (
            self._config == other._config
            and self._bandit_config == other._bandit_config
            and self._arms == other._arms
            and self._counts == other._counts
            and self._rewards == other._rewards
            and self._all_counts == other._all_counts
            and self._all_played == other._all_played
        )

    __hash__ = None  # type: ignore[assignment]
