"""Minimal stderr logger for the CLI and MCP hosts.

stdout carries the OTP (CLI) or JSON-RPC (MCP stdio) — all logging MUST go to stderr.
"""

import logging
import os
import sys


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

logger = logging.getLogger("motp")
logger.addHandler(_handler)
logger.setLevel(resolve_level(os.getenv("MOTP_LOG_LEVEL", "INFO")))


def debug_detail(message: str) -> None:
    logger.debug(message)
