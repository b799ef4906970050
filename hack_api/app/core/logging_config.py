"""
Logging setup driven by ``Settings``.

``setup_logging`` attaches a console handler, plus a file handler when
``LOG_FILE`` is set, to the root logger using ``LOG_LEVEL`` and
``LOG_FORMAT``.  It runs once per process: when the root logger already
has handlers (a second ``create_app`` in the test suite, or a host that
configured logging itself) it leaves them alone.

Client libraries that log every outbound request are capped at WARNING
so the request log and the broadcaster's own messages stay readable.
"""

import logging
from pathlib import Path
from typing import Iterable

from .config import Settings


CHATTY_LOGGERS = ("httpx", "httpcore", "slack_sdk")


def setup_logging(settings: Settings, chatty: Iterable[str] = CHATTY_LOGGERS) -> None:
    """Configure the root logger from ``settings``.

    Parameters
    ----------
    settings : Settings
        Supplies ``log_level`` (case insensitive, unknown names mean
        INFO), ``log_format`` and the optional ``log_file``.
    chatty : Iterable[str]
        Logger names never allowed below WARNING.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root.setLevel(level)
    formatter = logging.Formatter(fmt=settings.log_format, datefmt="%Y-%m-%d %H:%M:%S")

    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in chatty:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
