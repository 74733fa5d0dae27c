"""bandit_engine – annealing softmax and UCB bandits with identity-keyed persistence."""
from bandit_engine.config import (
    DEFAULT_BANDIT_CONFIG,
    AnnealingSoftmaxConfig,
    BanditConfig,
    UcbConfig,
)
from bandit_engine.errors import ArmNotFoundError, BanditError, RecordFormatError
from bandit_engine.factory import BanditFactory
from bandit_engine.identity import Identifiable, arm_ident
from bandit_engine.strategies.base import BaseBandit
from bandit_engine.strategies.softmax import AnnealingSoftmax
from bandit_engine.strategies.ucb import UCB

__all__ = [
    "DEFAULT_BANDIT_CONFIG",
    "AnnealingSoftmaxConfig",
    "BanditConfig",
    "UcbConfig",
    "ArmNotFoundError",
    "BanditError",
    "RecordFormatError",
    "BanditFactory",
    "Identifiable",
    "arm_ident",
    "BaseBandit",
    "AnnealingSoftmax",
    "UCB",
]
