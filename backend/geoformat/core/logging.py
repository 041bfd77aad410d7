"""Logging helpers for geoformat.

Adds a TRACE level below DEBUG and a logger class exposing ``trace()``. The library
never installs handlers on import; applications call ``setup_logging`` when they want
geoformat's output on stderr.
"""

from geoformat.core.settings import Settings
from typing import Final, Mapping, cast
import logging
import sys

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_FORMAT = '[%(levelname)s] %(message)s'
DEBUG_LOG_FORMAT = '[%(levelname)s] [%(name)s:%(lineno)d] [%(funcName)s] %(message)s'

_LEVEL_NAMES = {
    'TRACE': TRACE_LEVEL,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'WARN': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
    'FATAL': logging.CRITICAL,
    'NOTSET': logging.NOTSET,
}


class GeoformatLogger(logging.Logger):

    def trace(self, msg: object, *args: object, extra: Mapping[str, object] | None = None) -> None:
        """Log 'msg % args' with severity 'TRACE'."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, 'TRACE')


def resolve_env_log_level(value: str | None = None) -> int | None:
    """Return a logging level from GEOFORMAT_LOG_LEVEL, or None if unset or unknown.

    Accepts level names ("TRACE", "DEBUG", ...) and numeric strings ("10").
    """
    raw = Settings.LOG_LEVEL if value is None else value
    if not raw:
        return None
    name = raw.strip().upper()
    if name.isdigit():
        return int(name)
    return _LEVEL_NAMES.get(name)


class TraceLoggerAdapter(logging.LoggerAdapter):
    """Gives ``trace()`` to a plain Logger registered before geoformat was imported."""

    def trace(self, msg: object, *args: object, extra: Mapping[str, object] | None = None) -> None:
        if self.logger.isEnabledFor(TRACE_LEVEL):
            self.logger.log(TRACE_LEVEL, msg, *args, extra=extra, stacklevel=2)


def get_logger(name: str) -> GeoformatLogger | TraceLoggerAdapter:
    manager = logging.Logger.manager
    existing = manager.loggerDict.get(name)
    if isinstance(existing, GeoformatLogger):
        return existing
    if isinstance(existing, logging.Logger):
        return TraceLoggerAdapter(existing, {})
    # Instantiate our class directly so a foreign setLoggerClass() does not interfere
    previous = manager.loggerClass
    manager.setLoggerClass(GeoformatLogger)
    try:
        return cast(GeoformatLogger, logging.getLogger(name))
    finally:
        manager.loggerClass = previous


def setup_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the ``geoformat`` logger.

    Without an explicit ``level`` the environment is consulted, defaulting to WARNING.
    """
    if level is None:
        level = resolve_env_log_level() or logging.WARNING

    logger = logging.getLogger('geoformat')
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT))
    logger.addHandler(handler)
