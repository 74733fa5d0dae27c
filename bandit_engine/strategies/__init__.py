"""Bandit engine implementations."""

from bandit_engine.strategies.base import BaseBandit
from bandit_engine.strategies.softmax import AnnealingSoftmax
from bandit_engine.strategies.ucb import UCB

__all__ = [
    "BaseBandit",
    "AnnealingSoftmax",
    "UCB",
]
