"""Configuration models shared by the bandit engines."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BanditConfig(BaseModel):
    """Engine-independent settings supplied by the host at runtime.

    Never persisted: on load the caller's value wins over anything on disk.
    """

    model_config = ConfigDict(frozen=True)

    # Where select/update events are appended; ``None`` disables event logging.
    log_file: Optional[Path] = None


class AnnealingSoftmaxConfig(BaseModel):
    """Tuning for :class:`~bandit_engine.strategies.softmax.AnnealingSoftmax`."""

    model_config = ConfigDict(frozen=True)

    # Nominally in [0, 1); 1.0 is accepted and anneals to pure exploitation.
    cooldown_factor: float = Field(ge=0.0, allow_inf_nan=False)


class UcbConfig(BaseModel):
    """Tuning for :class:`~bandit_engine.strategies.ucb.UCB`."""

    model_config = ConfigDict(frozen=True)

    # Persisted with the bandit; the score uses a fixed exploration weight.
    alpha: float = Field(allow_inf_nan=False)


DEFAULT_BANDIT_CONFIG = BanditConfig()
DEFAULT_SOFTMAX_CONFIG = AnnealingSoftmaxConfig(cooldown_factor=0.5)
DEFAULT_UCB_CONFIG = UcbConfig(alpha=0.5)
