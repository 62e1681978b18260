"""Runtime environment helpers: logging setup and backend selection."""

from __future__ import annotations

import logging
import os
from typing import Literal, Set

StorageBackend = Literal["sql", "memory"]

_STORAGE_BACKENDS: Set[str] = {"sql", "memory"}


def get_log_level() -> int:
    """Return the numeric level named by LOG_LEVEL, defaulting to INFO."""
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    return getattr(logging, name, logging.INFO)


def configure_logging() -> None:
    """Apply the process-wide logging configuration from the environment."""
    logging.basicConfig(level=get_log_level())


def storage_backend() -> StorageBackend:
    """Return the storage backend chosen by SCOUTS_STORAGE_BACKEND.

    Raises ValueError for unknown names so that a typo never silently falls
    back to the in-memory store in a deployed process.
    """
    value = os.getenv("SCOUTS_STORAGE_BACKEND", "sql").strip().lower() or "sql"
    if value not in _STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown SCOUTS_STORAGE_BACKEND '{value}'. Expected one of: {sorted(_STORAGE_BACKENDS)}"
        )
    return value  # type: ignore[return-value]
