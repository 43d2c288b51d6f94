"""Logging setup shared by the CLI and GUI shells, rendered through structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog

from crv_common.config.env import parse_bool_env, parse_int_env

ENV_LEVEL = "CRV_LOG_LEVEL"
ENV_JSON = "CRV_LOG_JSON"
ENV_FILE = "CRV_LOG_FILE"


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    numeric = parse_int_env(value)
    if numeric is not None:
        return numeric
    return logging.getLevelNamesMapping().get(value.strip().upper(), logging.INFO)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _renderer(as_json: bool) -> structlog.types.Processor:
    if as_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _handlers(log_file: str | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Route stdlib and structlog records through one formatter.

    Explicit arguments win over ``CRV_LOG_LEVEL``, ``CRV_LOG_JSON`` and
    ``CRV_LOG_FILE``. Existing root handlers are left alone unless ``force``.
    """
    resolved_level = _resolve_level(level or os.environ.get(ENV_LEVEL), debug)
    resolved_json = parse_bool_env(os.environ.get(ENV_JSON)) if json is None else json
    resolved_log_file = os.environ.get(ENV_FILE) if log_file is None else log_file

    root = logging.getLogger()
    if root.handlers and not force:
        _configure_structlog()
        return

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_renderer(bool(resolved_json)),
        foreign_pre_chain=_shared_processors(),
    )
    if force:
        root.handlers.clear()
    root.setLevel(resolved_level)
    for handler in _handlers(resolved_log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _configure_structlog()
