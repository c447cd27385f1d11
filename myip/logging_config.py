"""Logging setup for the console, syslog and GELF targets."""
from __future__ import annotations

import logging
import logging.handlers
import os
import sys

import graypy

from myip.config import split_host_port

logger = logging.getLogger(__name__)

APP_LOGGER = "myip"
SYSLOG_IDENT = "myip: "
CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Remote collectors stamp records themselves
REMOTE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    return handler


def _syslog_handler() -> logging.Handler:
    address = "/dev/log" if os.path.exists("/dev/log") else ("localhost", 514)
    handler = logging.handlers.SysLogHandler(
        address=address, facility=logging.handlers.SysLogHandler.LOG_USER
    )
    handler.ident = SYSLOG_IDENT
    handler.setFormatter(logging.Formatter(REMOTE_FORMAT))
    return handler


def _gelf_handler(log_addr: str) -> logging.Handler:
    host, port = split_host_port(log_addr, default_port=12201)
    handler = graypy.GELFUDPHandler(host, port, facility=APP_LOGGER)
    handler.setFormatter(logging.Formatter(REMOTE_FORMAT))
    return handler


def build_handler(log_type: str, log_addr: str = "") -> logging.Handler:
    """Return the handler for `log_type`, falling back to stderr on failure."""
    log_type = (log_type or "console").lower()

    if log_type in ("syslog", "system"):
        try:
            return _syslog_handler()
        except OSError as exc:
            logger.warning(f"Failed to initialize syslog: {exc}, falling back to stderr")
            return _console_handler()

    if log_type == "gelf":
        if not log_addr:
            logger.warning("GELF address is not specified, falling back to stderr")
            return _console_handler()
        try:
            return _gelf_handler(log_addr)
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to initialize GELF: {exc}, falling back to stderr")
            return _console_handler()

    return _console_handler()


def configure_logging(settings) -> logging.Logger:
    """Install a single handler on the application logger."""
    app_logger = logging.getLogger(APP_LOGGER)
    for existing in list(app_logger.handlers):
        app_logger.removeHandler(existing)
        existing.close()

    app_logger.addHandler(build_handler(settings.LOG_TYPE, settings.LOG_ADDR))
    app_logger.setLevel(settings.LOG_LEVEL.upper())
    app_logger.propagate = False
    return app_logger
