# SPDX-License-Identifier: MIT
"""Configuration management for urirepo.

This module handles:
- Logging setup
- Environment-driven bootstrap of the default registry
"""

import logging
import os
import sys

from .uri import SCHEME_RE

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("urirepo")


# ---------- Default registry bootstrap ----------

MEMORY_SCHEMES_ENV = "URIREPO_MEMORY_SCHEMES"
DEFAULT_MEMORY_SCHEMES = "mem"


def get_memory_schemes() -> list[str]:
    """Get the schemes the default registry binds to in-memory repositories.

    Reads ``URIREPO_MEMORY_SCHEMES`` as a comma-separated list (default
    ``"mem"``). Whitespace around entries is stripped and empty entries are
    ignored, so ``URIREPO_MEMORY_SCHEMES=""`` disables the bootstrap.

    Returns:
        Schemes in configuration order, without duplicates

    Raises:
        RuntimeError: If an entry is not a valid lowercase scheme token
    """
    raw = os.getenv(MEMORY_SCHEMES_ENV, DEFAULT_MEMORY_SCHEMES)

    schemes: list[str] = []
    for entry in raw.split(","):
        scheme = entry.strip()
        if not scheme:
            continue
        if not SCHEME_RE.match(scheme):
            raise RuntimeError(f"{MEMORY_SCHEMES_ENV}: invalid scheme {scheme!r}")
        if scheme not in schemes:
            schemes.append(scheme)

    logger.debug("%s resolved to %s", MEMORY_SCHEMES_ENV, schemes)
    return schemes
