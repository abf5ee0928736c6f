"""
Structured internal diagnostics.

Emits one JSON object per line to stderr when
``URLSEAL_CORE__INTERNAL_LOGGING_ENABLED`` is true. The enabled flag is read
once and cached; tests reset it via ``_reset_for_tests()``. Diagnostics are
rate limited per component and never raise into the caller.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import Any, Callable

import orjson

Writer = Callable[[dict[str, Any]], None]

_internal_logging_enabled: bool | None = None
_rate_limit_per_minute: int | None = None
_windows: dict[str, tuple[float, int]] = {}
_lock = threading.Lock()


def _default_writer(payload: dict[str, Any]) -> None:
    text = orjson.dumps(payload, default=str).decode("utf-8") + "\n"
    sys.stderr.write(text)
    sys.stderr.flush()


_writer: Writer = _default_writer


def set_writer_for_tests(writer: Writer) -> None:
    """Replace the output writer (tests only)."""
    global _writer
    _writer = writer


def _reset_for_tests() -> None:
    global _internal_logging_enabled, _rate_limit_per_minute
    _internal_logging_enabled = None
    _rate_limit_per_minute = None
    with _lock:
        _windows.clear()


def _load_flags() -> None:
    global _internal_logging_enabled, _rate_limit_per_minute
    try:
        from .settings import Settings

        core = Settings().core
        _internal_logging_enabled = bool(core.internal_logging_enabled)
        _rate_limit_per_minute = int(core.diagnostics_rate_limit_per_minute)
    except Exception:
        _internal_logging_enabled = False
        _rate_limit_per_minute = 0


def is_enabled() -> bool:
    if _internal_logging_enabled is None:
        _load_flags()
    return bool(_internal_logging_enabled)


def _allow(component: str) -> bool:
    limit = _rate_limit_per_minute or 0
    if limit <= 0:
        return True
    now = time.monotonic()
    with _lock:
        start, count = _windows.get(component, (now, 0))
        if now - start >= 60.0:
            start, count = now, 0
        if count >= limit:
            _windows[component] = (start, count)
            return False
        _windows[component] = (start, count + 1)
        return True


def _emit(level: str, component: str, message: str, fields: dict[str, Any]) -> None:
    if not is_enabled() or not _allow(component):
        return
    payload: dict[str, Any] = {
        "timestamp": time.time(),
        "level": level,
        "logger": "urlseal",
        "component": component,
        "message": message,
    }
    payload.update(fields)
    try:
        _writer(payload)
    except Exception:
        # Diagnostics must never break the caller
        pass


def debug(component: str, message: str, **fields: Any) -> None:
    _emit("DEBUG", component, message, fields)


def warn(component: str, message: str, **fields: Any) -> None:
    _emit("WARN", component, message, fields)
