"""Factory for selecting and constructing bandit engines by name."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Type, Union

from bandit_engine.config import DEFAULT_BANDIT_CONFIG, AnnealingSoftmaxConfig, BanditConfig, UcbConfig
from bandit_engine.identity import A
from bandit_engine.settings import Settings
from bandit_engine.strategies.base import BaseBandit
from bandit_engine.strategies.softmax import AnnealingSoftmax
from bandit_engine.strategies.ucb import UCB


class BanditFactory:
    """Resolve an engine name and build or load a matching engine."""

    ENGINES: Dict[str, Type[BaseBandit]] = {
        "annealing_softmax": AnnealingSoftmax,
        "ucb": UCB,
    }

    def __init__(
        self,
        default_engine: str = "annealing_softmax",
        bandit_config: BanditConfig = DEFAULT_BANDIT_CONFIG,
        softmax_config: Optional[AnnealingSoftmaxConfig] = None,
        ucb_config: Optional[UcbConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.default_engine = self.validate_name(default_engine)
        self.bandit_config = bandit_config
        self.softmax_config = softmax_config
        self.ucb_config = ucb_config
        self.seed = seed

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BanditFactory":
        settings = settings or Settings()
        logging.getLogger("bandit_engine").setLevel(settings.log_level.upper())
        return cls(
            default_engine=settings.strategy,
            bandit_config=settings.bandit_config(),
            softmax_config=settings.softmax_config(),
            ucb_config=settings.ucb_config(),
            seed=settings.seed,
        )

    @staticmethod
    def normalize_name(name: str) -> str:
        val = name.strip().lower().replace("-", "_")
        aliases = {
            "softmax": "annealing_softmax",
            "annealing": "annealing_softmax",
            "annealingsoftmax": "annealing_softmax",
            "ucb1": "ucb",
        }
        return aliases.get(val, val)

    @classmethod
    def validate_name(cls, name: str) -> str:
        normalized = cls.normalize_name(name)
        if normalized not in cls.ENGINES:
            raise ValueError(
                f"Unsupported bandit '{name}'. Valid values: ANNEALING_SOFTMAX, UCB."
            )
        return normalized

    def _algo_config(self, normalized: str) -> Optional[Union[AnnealingSoftmaxConfig, UcbConfig]]:
        if normalized == "annealing_softmax":
            return self.softmax_config
        return self.ucb_config

    def build(
        self,
        arms: Iterable[A],
        name: Optional[str] = None,
        **params: Any,
    ) -> BaseBandit[A]:
        """Build a fresh engine.

        ``params`` override the factory defaults: ``bandit_config``,
        ``config`` and ``seed``.
        """
        normalized = self.validate_name(name or self.default_engine)
        params.setdefault("bandit_config", self.bandit_config)
        params.setdefault("seed", self.seed)
        algo_config = self._algo_config(normalized)
        if algo_config is not None:
            params.setdefault("config", algo_config)
        return self.ENGINES[normalized](arms, **params)

    def load(
        self,
        arms: Iterable[A],
        path: Union[str, Path],
        name: Optional[str] = None,
        bandit_config: Optional[BanditConfig] = None,
    ) -> BaseBandit[A]:
        """Load a saved engine; the algorithm config comes from the file."""
        normalized = self.validate_name(name or self.default_engine)
        return self.ENGINES[normalized].load_bandit(
            arms,
            bandit_config or self.bandit_config,
            path,
            seed=self.seed,
        )
