"""Annealing Softmax: Boltzmann exploration with a cooling temperature."""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import numpy as np

from bandit_engine.config import DEFAULT_SOFTMAX_CONFIG, AnnealingSoftmaxConfig, BanditConfig
from bandit_engine.identity import A, arm_ident
from bandit_engine.state.codec import by_arm, by_ident, read_record, resolve_idents, write_record
from bandit_engine.state.records import SoftmaxRecord
from bandit_engine.strategies.base import BaseBandit
from bandit_engine.utils import select_argmax

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = DEFAULT_SOFTMAX_CONFIG

# Keeps ln(total) away from ln(1) == 0 on a cold start.
TEMPERATURE_EPSILON = 1e-7


class AnnealingSoftmax(BaseBandit[A]):
    r"""Softmax selection whose temperature falls as pulls accumulate.

    Each arm is drawn with probability proportional to

    .. math::

        (e \cdot f)^{\bar{x}_i / T}, \qquad T = \frac{1}{\ln(1 + \sum_j n_j + \epsilon)}

    where :math:`\bar{x}_i` is the running mean reward of arm *i*, :math:`n_j`
    the pull counts and *f* the ``cooldown_factor``.  Once the weights
    overflow the engine is considered fully annealed and always returns the
    arm with the highest mean.
    """

    name = "annealing_softmax"

    def __init__(
        self,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        config: AnnealingSoftmaxConfig = DEFAULT_CONFIG,
        *,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(arms, bandit_config, seed=seed)
        self._config = config
        self._values: Dict[A, float] = {arm: 0.0 for arm in self._arms}

    @classmethod
    def new_with_values(
        cls,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        config: AnnealingSoftmaxConfig,
        counts: Mapping[A, int],
        values: Mapping[A, float],
        *,
        seed: Optional[int] = None,
    ) -> "AnnealingSoftmax[A]":
        """Build an engine from existing statistics; missing arms start at zero."""
        bandit = cls(arms, bandit_config, config, seed=seed)
        for arm, count in counts.items():
            bandit._require_arm(arm)
            bandit._counts[arm] = int(count)
        for arm, value in values.items():
            bandit._require_arm(arm)
            bandit._values[arm] = float(value)
        return bandit

    @classmethod
    def load_bandit(
        cls,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        path: Union[str, Path],
        **kwargs: Any,
    ) -> "AnnealingSoftmax[A]":
        arms = list(arms)
        record = read_record(path, SoftmaxRecord)
        resolved = resolve_idents(arms, record)
        return cls.new_with_values(
            arms,
            bandit_config,
            record.config,
            by_arm(record.counts, resolved),
            by_arm(record.values, resolved),
            **kwargs,
        )

    # -- read-only views ------------------------------------------------------

    @property
    def config(self) -> AnnealingSoftmaxConfig:
        return self._config

    @property
    def values(self) -> Dict[A, float]:
        return dict(self._values)

    def arm_statistic(self, arm: A) -> float:
        return self._values[arm]

    # -- core API -------------------------------------------------------------

    def temperature(self) -> float:
        total = 1 + sum(self._counts.values())
        return 1.0 / math.log(total + TEMPERATURE_EPSILON)

    def select_arm(self) -> A:
        arm = self._choose()
        self._log_select(arm)
        return arm

    def _choose(self) -> A:
        values = np.array([self._values[arm] for arm in self._arms], dtype=np.float64)
        cool_down = math.e * self._config.cooldown_factor

        # Large values overflow to inf and 0 * inf style inputs turn into
        # NaN; both are handled below instead of warning or raising.
        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            weights = np.power(cool_down, values / self.temperature())
            z = weights.sum()

            if np.isinf(z):
                # Fully annealed: the best mean wins, first arm on ties.
                best = select_argmax(values.tolist())
                return self._arms[-1] if best is None else self._arms[best]

            probs = weights / z

        r = self._rng.random()
        cumulative = 0.0
        for arm, prob in zip(self._arms, probs):
            if not math.isnan(prob):
                cumulative += float(prob)
            if cumulative > r:
                return arm

        # Rounding left the cumulative sum at or below r.
        return self._arms[-1]

    def update(self, arm: A, reward: float) -> None:
        self._require_arm(arm)
        self._counts[arm] += 1
        self._fold_reward(arm, reward, self._counts[arm])
        self._log_update(arm)

    def update_counts(self, arm: A) -> None:
        self._require_arm(arm)
        self._counts[arm] += 1
        self._log_update(arm)

    def update_rewards(self, arm: A, reward: float) -> None:
        self._require_arm(arm)
        n = self._counts[arm]
        if n == 0:
            logger.warning(
                "update_rewards for arm %s before update_counts; treating as first pull",
                arm_ident(arm),
            )
            n = 1
        self._fold_reward(arm, reward, n)
        self._log_update(arm)

    def _fold_reward(self, arm: A, reward: float, n: int) -> None:
        value = self._values[arm]
        self._values[arm] = ((n - 1) / n) * value + (1 / n) * float(reward)

    # -- persistence ----------------------------------------------------------

    def save_bandit(self, path: Union[str, Path]) -> None:
        record = SoftmaxRecord(
            config=self._config,
            arms=[arm_ident(arm) for arm in self._arms],
            counts=by_ident(self._counts),
            values=by_ident(self._values),
        )
        write_record(path, record)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnealingSoftmax):
            return NotImplemented
        return (
            self._config == other._config
            and self._bandit_config == other._bandit_config
            and self._arms == other._arms
            and self._counts == other._counts
            and self._values == other._values
        )

    __hash__ = None  # type: ignore[assignment]
