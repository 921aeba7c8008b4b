from __future__ import annotations

import logging
import os
import sys

from loguru import logger as _loguru_logger


class _LoggerProxy:
    """Compatibility wrapper that mimics ``logging.Logger`` semantics."""

    def __init__(self, inner):
        self._inner = inner

    def _log(self, method: str, message: str, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", None)
        if args:
            try:
                message = message % args
            except (TypeError, ValueError):
                message = " ".join([message, *map(str, args)])
        target = self._inner
        if exc_info:
            if exc_info is True:
                target = target.opt(exception=True)
            else:
                target = target.opt(exception=exc_info)
        return getattr(target, method)(message, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        return self._log("debug", message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        return self._log("info", message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        return self._log("warning", message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        return self._log("error", message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        return self._log("exception", message, *args, **kwargs)

    def success(self, message: str, *args, **kwargs):
        return self._log("success", message, *args, **kwargs)

    def __getattr__(self, name: str):
        return getattr(self._inner, name)


logger = _LoggerProxy(_loguru_logger)


class InterceptHandler(logging.Handler):
    """Forward standard logging records (urllib3, requests) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        # Skip internal frames from the logging module
        _loguru_logger.opt(depth=6, exception=record.exc_info).log(
            record.levelno, record.getMessage()
        )


def _resolve_level(level_name: str | None, default: str) -> str:
    env_level = os.getenv("SHARESIGHT_LOG_LEVEL", "").strip().upper()
    if env_level:
        return env_level
    debug_env = os.getenv("SHARESIGHT_DEBUG", "0")
    if debug_env not in {"0", "", "false", "False"}:
        return "DEBUG"
    return (level_name or default).upper()


def setup_logging(level_name: str | None = None, *, default: str = "WARNING") -> str:
    """Configure loguru logging on stderr and return the active level name.

    ``SHARESIGHT_LOG_LEVEL`` wins over ``SHARESIGHT_DEBUG``, which wins over
    ``level_name``. stdout is left alone so command output stays parseable.
    """
    level = _resolve_level(level_name, default)
    if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
        level = default

    _loguru_logger.remove()
    _loguru_logger.add(
        sys.stderr,
        level=level,
        format="{level} - {time:HH:mm:ss}: {message}",
    )
    logging.basicConfig(
        handlers=[InterceptHandler()],
        level=getattr(logging, level, logging.DEBUG),
        force=True,
    )

    logger.debug(f"Logging setup: level={level}")
    return level


def mask_secret(value: str | None, visible: int = 5) -> str:
    """Return ``value`` with everything after the first ``visible`` chars hidden."""
    if not value:
        return "***"
    return f"{value[:visible]}***" if len(value) > visible else "***"
