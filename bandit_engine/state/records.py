"""Pydantic models for the persisted bandit record."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from bandit_engine.config import AnnealingSoftmaxConfig, UcbConfig


class BanditRecord(BaseModel):
    """Fields common to every engine's on-disk format."""

    # Infinity/NaN statistics must survive a save/load cycle.
    model_config = ConfigDict(ser_json_inf_nan="constants")

    arms: List[str]
    counts: Dict[str, NonNegativeInt]

    def stats(self) -> Dict[str, float]:
        """The per-arm value statistic (``values`` or ``rewards``)."""
        return {}

    def idents(self) -> List[str]:
        """Every identity mentioned anywhere in the record, first occurrence first."""
        return list(dict.fromkeys([*self.arms, *self.counts, *self.stats()]))


class SoftmaxRecord(BanditRecord):
    config: AnnealingSoftmaxConfig
    values: Dict[str, float]

    def stats(self) -> Dict[str, float]:
        return self.values


class UcbRecord(BanditRecord):
    config: UcbConfig
    rewards: Dict[str, float]

    def stats(self) -> Dict[str, float]:
        return self.rewards
