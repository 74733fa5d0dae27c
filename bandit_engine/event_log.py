"""Best-effort, append-only event log.

One line per event::

    SELECT;<ident>;<millis>
    UPDATE;<ident>;<millis>;<value>

Writing is fire-and-forget: failures are reported on the module logger and
never reach the caller.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from bandit_engine.identity import arm_ident
from bandit_engine.utils import timestamp_millis

logger = logging.getLogger(__name__)

SELECT = "SELECT"
UPDATE = "UPDATE"


def log_command(cmd: str, arm: object, value: Optional[float] = None) -> str:
    """Format a single event line (without the trailing newline)."""
    line = f"{cmd};{arm_ident(arm)};{timestamp_millis()}"
    if value is not None:
        line = f"{line};{value!r}"
    return line


def log(line: str, path: Optional[Union[str, Path]]) -> None:
    """Append *line* to *path*; a no-op when no path is configured."""
    if path is None:
        return
    try:
        with open(path, "a", encoding="utf-8", errors="backslashreplace") as fh:
            fh.write(line + "\n")
    except (OSError, ValueError) as exc:
        logger.warning("writing event log %s failed (%s): %s", path, exc, line)
