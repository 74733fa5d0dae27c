"""Arm identity contract.

Engines never look inside an arm.  They only hash it, compare it, and ask it
for a stable identity string which is used as the persistence key.
"""
from __future__ import annotations

from typing import Hashable, Iterable, List, Protocol, Sequence, TypeVar, runtime_checkable

from bandit_engine.errors import ArmNotFoundError


@runtime_checkable
class Identifiable(Protocol):
    """An arm that knows its own persistence key."""

    def ident(self) -> str: ...


A = TypeVar("A", bound=Hashable)


def arm_ident(arm: object) -> str:
    """Return the identity string of *arm*.

    Arms implementing :class:`Identifiable` provide their own key; any other
    value (``int``, ``str``, enums, ...) is keyed by ``str(arm)``.
    """
    if isinstance(arm, Identifiable):
        return arm.ident()
    return str(arm)


def find_arm(arms: Sequence[A], ident: str) -> A:
    """Return the arm in *arms* whose identity equals *ident*.

    Raises
    ------
    ArmNotFoundError
        If no arm carries that identity.
    """
    for arm in arms:
        if arm_ident(arm) == ident:
            return arm
    raise ArmNotFoundError(ident)


def ensure_unique_idents(arms: Iterable[object]) -> List[str]:
    """Return the identities of *arms*, rejecting duplicates."""
    idents: List[str] = []
    seen = set()
    for arm in arms:
        ident = arm_ident(arm)
        if ident in seen:
            raise ValueError(f"duplicate arm identity '{ident}'")
        seen.add(ident)
        idents.append(ident)
    return idents
