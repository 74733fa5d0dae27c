"""Runtime defaults loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bandit_engine.config import AnnealingSoftmaxConfig, BanditConfig, UcbConfig


class Settings(BaseSettings):
    """Host-level defaults for building bandit engines."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    strategy: str = Field(default="ANNEALING_SOFTMAX", alias="BANDIT_STRATEGY")
    log_file: Optional[Path] = Field(default=None, alias="BANDIT_LOG_FILE")
    cooldown_factor: float = Field(
        default=0.5, ge=0.0, allow_inf_nan=False, alias="BANDIT_COOLDOWN_FACTOR"
    )
    ucb_alpha: float = Field(default=0.5, allow_inf_nan=False, alias="BANDIT_UCB_ALPHA")
    seed: Optional[int] = Field(default=None, alias="BANDIT_SEED")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def bandit_config(self) -> BanditConfig:
        return BanditConfig(log_file=self.log_file)

    def softmax_config(self) -> AnnealingSoftmaxConfig:
        return AnnealingSoftmaxConfig(cooldown_factor=self.cooldown_factor)

    def ucb_config(self) -> UcbConfig:
        return UcbConfig(alpha=self.ucb_alpha)
