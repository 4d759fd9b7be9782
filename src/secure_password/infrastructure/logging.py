"""Shared logging configuration helpers for host processes."""

from __future__ import annotations

import logging

from secure_password.config.settings import load_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_log_level(level: str) -> int:
    """Map a level name to a ``logging`` constant, defaulting to INFO."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved = getattr(logging, normalized_level, logging.INFO)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str | None = None) -> None:
    """Configure process logging; level falls back to the ``LOG_LEVEL`` setting."""

    resolved_level = resolve_log_level(level if level is not None else load_settings().log_level)

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )
