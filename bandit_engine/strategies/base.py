"""Abstract base class shared by every bandit engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, Union

import numpy as np

from bandit_engine import event_log
from bandit_engine.config import BanditConfig
from bandit_engine.errors import ArmNotFoundError
from bandit_engine.identity import A, arm_ident, ensure_unique_idents


class BaseBandit(ABC, Generic[A]):
    """Common interface for all Multi-Armed Bandit engines.

    An engine owns a fixed, ordered list of arms and per-arm pull counts.
    Subclasses add one value statistic per arm and decide how it is used
    for selection.

    None of the methods lock.  :meth:`select_arm` only reads statistics, so
    concurrent selects are fine, but hosts mutating one engine from several
    threads must guard every ``update*`` call themselves.  The split
    :meth:`update_counts` / :meth:`update_rewards` pair lets the lock be
    released while the reward is still pending.
    """

    name: str = "base"  # human-friendly label, overridden by subclasses

    def __init__(
        self,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        *,
        seed: Optional[int] = None,
    ) -> None:
        self._arms: List[A] = list(arms)
        if not self._arms:
            raise ValueError("arms cannot be empty")
        ensure_unique_idents(self._arms)
        self._bandit_config = bandit_config
        self._counts: Dict[A, int] = {arm: 0 for arm in self._arms}
        self._rng = np.random.default_rng(seed)

    # ---- abstract API -------------------------------------------------------

    @abstractmethod
    def select_arm(self) -> A:
        """Choose the arm to pull next.

        Never mutates statistics; may draw from the engine's random source.
        """

    @abstractmethod
    def update(self, arm: A, reward: float) -> None:
        """Count a pull of *arm* and fold *reward* into its statistic."""

    @abstractmethod
    def update_counts(self, arm: A) -> None:
        """Count a pull of *arm* without touching its value statistic.

        Must be followed by exactly one :meth:`update_rewards` for the same
        pull once the reward is known.
        """

    @abstractmethod
    def update_rewards(self, arm: A, reward: float) -> None:
        """Fold *reward* into *arm*'s statistic for an already counted pull."""

    @abstractmethod
    def save_bandit(self, path: Union[str, Path]) -> None:
        """Persist the engine state as JSON keyed by arm identity.

        Raises ``OSError`` if the file cannot be written.
        """

    @classmethod
    @abstractmethod
    def load_bandit(
        cls,
        arms: Iterable[A],
        bandit_config: BanditConfig,
        path: Union[str, Path],
        **kwargs: Any,
    ) -> "BaseBandit[A]":
        """Rebuild an engine saved with :meth:`save_bandit`."""

    @abstractmethod
    def arm_statistic(self, arm: A) -> float:
        """The value statistic logged with ``UPDATE`` events."""

    # ---- read-only views ----------------------------------------------------

    @property
    def arms(self) -> List[A]:
        return list(self._arms)

    @property
    def counts(self) -> Dict[A, int]:
        return dict(self._counts)

    @property
    def bandit_config(self) -> BanditConfig:
        return self._bandit_config

    # ---- helpers ------------------------------------------------------------

    def _require_arm(self, arm: A) -> None:
        if arm not in self._counts:
            raise ArmNotFoundError(arm_ident(arm))

    def _log_select(self, arm: A) -> None:
        event_log.log(event_log.log_command(event_log.SELECT, arm), self._bandit_config.log_file)

    def _log_update(self, arm: A) -> None:
        event_log.log(
            event_log.log_command(event_log.UPDATE, arm, self.arm_statistic(arm)),
            self._bandit_config.log_file,
        )

    def __repr__(self) -> str:
        idents = ", ".join(arm_ident(arm) for arm in self._arms)
        return f"{type(self).__name__}(arms=[{idents}])"
