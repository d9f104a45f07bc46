# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for burstprobe.

Outcome lines are product output and go to stdout; everything routed through
``logging`` lands on stderr so the two never interleave in a pipe.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _default_level() -> str:
    return os.getenv("BURSTPROBE_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None, *, stream: TextIO | None = None) -> None:
    """Configure standard logging for CLI/library use.

    An explicit ``level`` replaces any handlers installed earlier, so a CLI flag
    wins over whatever a host application configured.
    """
    effective_level = (level or _default_level()).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format=LOG_FORMAT,
        stream=stream or sys.stderr,
        force=level is not None,
    )


__all__ = ["LOG_FORMAT", "setup_logging"]
