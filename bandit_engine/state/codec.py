"""Read and write persisted bandit records.

Records are keyed by arm identity strings so they stay valid no matter how
the host represents arms in memory.  Loading resolves every identity against
the arms supplied by the caller; one unknown identity fails the whole load.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Sequence, Type, TypeVar, Union

from pydantic import ValidationError

from bandit_engine.errors import RecordFormatError
from bandit_engine.identity import A, arm_ident, find_arm
from bandit_engine.state.records import BanditRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BanditRecord)
V = TypeVar("V")

PathLike = Union[str, Path]


def write_record(path: PathLike, record: BanditRecord) -> None:
    """Serialize *record* as a single JSON file, flushed before returning."""
    payload = record.model_dump_json()
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(payload)
        fh.flush()
    logger.debug("Saved bandit record with %d arms to %s", len(record.arms), path)


def read_record(path: PathLike, model: Type[R]) -> R:
    """Parse the record at *path*.

    ``OSError`` from opening or reading propagates unchanged; malformed
    content is reported as :class:`RecordFormatError`.
    """
    with open(path, "r", encoding="utf-8") as fh:
        content = fh.read()
    try:
        return model.model_validate_json(content)
    except ValidationError as exc:
        raise RecordFormatError(f"invalid bandit record in {path}: {exc}") from exc


def by_ident(stats: Mapping[A, V]) -> Dict[str, V]:
    """Re-key an arm-keyed mapping by identity string."""
    return {arm_ident(arm): value for arm, value in stats.items()}


def resolve_idents(arms: Sequence[A], record: BanditRecord) -> Dict[str, A]:
    """Map every identity in *record* to the matching supplied arm.

    Raises
    ------
    ArmNotFoundError
        If any persisted identity has no counterpart in *arms*.
    """
    return {ident: find_arm(arms, ident) for ident in record.idents()}


def by_arm(stats: Mapping[str, V], resolved: Mapping[str, A]) -> Dict[A, V]:
    """Inverse of :func:`by_ident` using a table from :func:`resolve_idents`."""
    return {resolved[ident]: value for ident, value in stats.items()}
