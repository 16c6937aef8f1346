"""
Rivulet Configuration - Process-Wide Settings
=============================================

Settings live in a single `RivuletConfig` dataclass. Read them with
`get_config()`, change them with `configure(...)`, or scope a change with
the `configured(...)` context manager (handy in tests).

Environment variables read by `load_config_from_env()`:

- `RIVULET_TRACE_RESOURCES` - "1"/"true" turns on live-subscription counting
- `RIVULET_DEBUG_LEVEL` - logging level name used by the `debug()` operator
"""

import logging
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)


def log_unhandled_error(error: BaseException) -> None:
    """Default sink for Error events that reach an observer without a handler."""
    logger.error(
        "Unhandled error in observable sequence: %r",
        error,
        exc_info=(type(error), error, error.__traceback__),
    )


@dataclass
class RivuletConfig:
    """Tunable behaviour of the runtime."""

    unhandled_error_handler: Callable[[BaseException], None] = field(
        default=log_unhandled_error
    )
    debug_log_level: int = logging.DEBUG
    debug_trim_output: bool = False
    trace_resources: bool = False


_lock = threading.Lock()
_config = RivuletConfig()


def get_config() -> RivuletConfig:
    return _config


def configure(**overrides) -> RivuletConfig:
    """
    Replace selected settings.

    Raises:
        TypeError: If an unknown setting name is given
    """
    global _config
    with _lock:
        _config = replace(_config, **overrides)
        return _config


@contextmanager
def configured(**overrides) -> Iterator[RivuletConfig]:
    """Apply settings for the duration of a `with` block."""
    global _config
    with _lock:
        previous = _config
        _config = replace(previous, **overrides)
    try:
        yield _config
    finally:
        with _lock:
            _config = previous


def _parse_flag(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env(environ: Optional[dict] = None) -> RivuletConfig:
    """Apply settings found in the environment on top of the current ones."""
    environ = os.environ if environ is None else environ
    overrides = {}

    if "RIVULET_TRACE_RESOURCES" in environ:
        overrides["trace_resources"] = _parse_flag(environ["RIVULET_TRACE_RESOURCES"])

    level_name = environ.get("RIVULET_DEBUG_LEVEL")
    if level_name:
        level = logging.getLevelName(level_name.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level_name!r}")
        overrides["debug_log_level"] = level

    return configure(**overrides)
