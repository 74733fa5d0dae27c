"""Exceptions raised by bandit engines and the persistence codec."""
from __future__ import annotations


class BanditError(Exception):
    """Base class for recoverable bandit failures."""


class ArmNotFoundError(BanditError, LookupError):
    """An arm identity could not be resolved against the configured arms."""

    def __init__(self, ident: str) -> None:
        super().__init__(f"arm {ident} not found")
        self.ident = ident


class RecordFormatError(BanditError, ValueError):
    """A persisted bandit record is not well formed."""
