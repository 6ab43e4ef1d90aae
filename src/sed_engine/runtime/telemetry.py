"""Structured logging for the compiler, engine and CLI, backed by telelog.

Output goes to standard output, so console logging stays off unless
``SED_ENGINE_LOG_CONSOLE`` is set or ``configure(debug=True)`` is called
(``--debug`` on the command line). Other knobs: ``SED_ENGINE_LOG_LEVEL``
(default ``WARNING``), ``SED_ENGINE_LOG_FILE``, ``SED_ENGINE_NO_COLOR`` and
``SED_ENGINE_LOG_JSON``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "SED_ENGINE_"
LOGGER_NAME = "sed_engine"

_LOGGERS: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env_flag(name: str) -> bool:
    return os.getenv(f"{ENV_PREFIX}{name}", "").lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _build_config(debug: bool) -> Any:
    config = tl.Config()
    config.with_profiling(True)
    if debug:
        config.with_min_level("DEBUG")
    else:
        config.with_min_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper())

    console = debug or _env_flag("LOG_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    return config


def configure(*, debug: bool = False) -> None:
    """Rebuild the telelog configuration; ``debug`` logs everything to the console."""

    global _config
    _config = _build_config(debug)
    _LOGGERS.clear()


def get_logger(name: str = LOGGER_NAME) -> Any:
    if _config is None:
        configure()
    if name not in _LOGGERS:
        _LOGGERS[name] = tl.Logger.with_config(name, _config)
    return _LOGGERS[name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method = getattr(log, f"{level}_with")
    method(message, [(key, _stringify(value)) for key, value in payload.items()])


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    """Emit an ``event::<name>`` record carrying ``data`` as key/value pairs."""

    _emit(get_logger(), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Live view of a running ``span``; metadata lands on the failure record."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, tracked as ``component`` when given.

    ``metadata`` is attached as logger context for the duration of the
    block. An exception escaping the block is logged as ``span::fail`` and
    re-raised.
    """

    log = get_logger()
    handle = SpanHandle(logger=log, name=name, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in metadata or {}:
                log.remove_context(key)


__all__ = ["SpanHandle", "configure", "get_logger", "record_event", "span"]
