"""Logging and profiling hooks for the line engine, backed by telelog.

Settings are read from ``LINE_ENGINE_*`` environment variables:

``LOG_LEVEL``          minimum level, ``WARNING`` unless set
``LOG_FILE``           also write records to this file
``LOG_JSON``           emit JSON records
``NO_COLOR``           plain console output
``DISABLE_CONSOLE``    no console output at all
``PROFILE_HIGHLIGHT``  time every ``Document.highlight`` pass
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINE_ENGINE_"
LOGGER_NAME = "line_engine"
HIGHLIGHT_LOG_FILE = "line_engine-highlight.log"

_TRUTHY = {"1", "true", "yes", "on"}

_loggers: MutableMapping[str, Any] = {}
_settings: Optional["TelemetrySettings"] = None
_config: Optional[Any] = None


@dataclass(frozen=True)
class TelemetrySettings:
    level: str = "WARNING"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: Optional[str] = None
    profile_highlight: bool = False

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(name: str) -> bool:
            return env.get(ENV_PREFIX + name, "").lower() in _TRUTHY

        return cls(
            level=(env.get(ENV_PREFIX + "LOG_LEVEL") or "WARNING").upper(),
            console=not flag("DISABLE_CONSOLE"),
            color=not flag("NO_COLOR"),
            json=flag("LOG_JSON"),
            log_file=env.get(ENV_PREFIX + "LOG_FILE") or None,
            profile_highlight=flag("PROFILE_HIGHLIGHT"),
        )

    @classmethod
    def highlight_profiling(
        cls, log_file: str = HIGHLIGHT_LOG_FILE
    ) -> "TelemetrySettings":
        """Debug-level JSON records in a file, with highlight passes timed."""

        return cls(
            level="DEBUG",
            console=False,
            json=True,
            log_file=log_file,
            profile_highlight=True,
        )

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.color)
        config.with_json_format(self.json)
        if self.log_file:
            config.with_file_output(self.log_file)
        config.with_profiling(True)
        return config


def configure(
    settings: Optional[TelemetrySettings] = None, *, config: Optional[Any] = None
) -> None:
    """Install new settings, or adopt an explicit ``telelog.Config``.

    With neither argument the settings are re-read from the environment.
    Cached loggers are dropped so later lookups see the change.
    """

    global _settings, _config
    if settings is not None and config is not None:
        raise ValueError("Provide either `settings` or `config`, not both.")

    if config is None:
        _settings = settings or TelemetrySettings.from_env()
        _config = _settings.to_config()
    else:
        _settings = TelemetrySettings()
        _config = config
    _loggers.clear()


def current_settings() -> TelemetrySettings:
    if _settings is None:
        configure()
    return cast(TelemetrySettings, _settings)


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    if _config is None:
        configure()
    logger_name = name or LOGGER_NAME
    if logger_name not in _loggers:
        _loggers[logger_name] = tl.Logger.with_config(logger_name, _config)
    return _loggers[logger_name]


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(key, _text(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported on failure."""

    logger: Any
    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.metadata}
        if self.component:
            payload["component"] = self.component
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    profile: bool = True,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Run a block with ``metadata`` pushed as logger context.

    ``profile`` times the block with ``logger.profile``; ``component`` also
    tracks it under that component id. An exception marks the span failed
    and propagates.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, name=name, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        for key, value in handle.metadata.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        if profile:
            stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "SpanHandle",
    "TelemetrySettings",
    "configure",
    "current_settings",
    "get_logger",
    "record_event",
    "span",
]
