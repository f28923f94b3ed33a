from __future__ import annotations

import logging
import os
from typing import Any, Optional

ENV_LEVEL = "AFF_LOG_LEVEL"
FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# chatty per-request loggers of the download stack
_NOISY = ("urllib3", "requests")


def _env_level() -> Optional[int]:
    raw = (os.environ.get(ENV_LEVEL) or "").strip().upper()
    if raw == "WARN":
        raw = "WARNING"
    level = logging.getLevelName(raw) if raw else None
    return level if isinstance(level, int) else None


def _cli_level(args: Any) -> int:
    if getattr(args, "basic_debug", False):
        return logging.DEBUG
    if getattr(args, "quiet", False):
        return logging.WARNING
    return logging.INFO


def setup_logging(args: Any = None, *, name: str = "aff_chart") -> None:
    """Configure python logging once per process.

    ``AFF_LOG_LEVEL`` wins over ``--basic_debug`` which wins over ``--quiet``;
    the default is INFO. Does nothing when the root logger already has
    handlers (embedding applications, pytest).
    """
    root = logging.getLogger()
    if root.handlers:
        return

    env = _env_level()
    level = env if env is not None else _cli_level(args)
    logging.basicConfig(level=level, format=FORMAT, datefmt="%H:%M:%S")

    if level > logging.DEBUG:
        for noisy in _NOISY:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(name).debug(
        "logging initialized (level=%s, env=%s)", logging.getLevelName(level), env is not None
    )
