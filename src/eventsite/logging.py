"""Logging setup for EVENTSITE processes.

Library modules only call ``logging.getLogger(__name__)`` and emit records.
Handlers are installed once, by the entrypoint, through `setup_logging`:

- a Rich console handler on stderr whose level follows -v/-q, and
- an optional "flight recorder": a bounded in-memory buffer of DEBUG records
  that is written to a file only once something at WARNING or above happens
  (or on exit, when forced).

Repository retries, lost subdomain races and store outages are logged at
WARNING, so the flight recorder captures the DEBUG context leading up to them.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass, field
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import Literal

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

PROJECT_LOGGER = "eventsite"
DEFAULT_FLIGHT_CAPACITY = 2000

CONSOLE_FORMAT = "%(prefix)s %(message)s"
CONSOLE_DEBUG_FORMAT = "%(asctime)s %(name)s: %(message)s"
FILE_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)

ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


@dataclass(frozen=True)
class LoggingOptions:
    """Everything the entrypoint decided about logging for this process.

    `console_level` is ignored when `debug` is set; the console then shows
    DEBUG records with timestamps and source paths.
    """

    console_level: int = logging.WARNING
    debug: bool = False
    color: bool = True
    log_path: Path | None = None
    flight_capacity: int = DEFAULT_FLIGHT_CAPACITY
    force_flush: bool = False
    logger_levels: dict[str, int] = field(default_factory=dict)

    @property
    def flight_recorder(self) -> bool:
        return self.log_path is not None

    @property
    def effective_console_level(self) -> int:
        return logging.DEBUG if self.debug else self.console_level


def verbosity_to_level(verbose: int, quiet: int) -> int:
    """Map repeated -v/-q flags to a level, one step of 10 per flag from WARNING."""
    level = logging.WARNING + 10 * (quiet - verbose)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other packages with their top-level name.

    Sets ``record.prefix`` to e.g. ``"[sqlalchemy]"``, or to ``""`` for our
    own loggers. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.partition(".")[0]
        record.prefix = "" if top == PROJECT_LOGGER else f"[{top}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr handler.

    In debug mode the level is forced to DEBUG, timestamps and logger names
    are shown and file paths become links; otherwise library records carry a
    short prefix instead.
    """
    color_system: ColorSystem | None = "auto" if color else None
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(CONSOLE_DEBUG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = DEFAULT_FLIGHT_CAPACITY,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a buffer of up to `capacity` records that spills into `path`.

    The file is truncated when the handler is built. Buffered records are
    written when one at `flush_level` or above arrives, when the buffer is
    full, or on close if `flush_on_close` is set.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setLevel(logging.DEBUG)
    target.setFormatter(logging.Formatter(FILE_FORMAT))
    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=target,
        flushOnClose=flush_on_close,
    )


def setup_logging(options: LoggingOptions) -> list[logging.Handler]:
    """Install handlers on the root logger according to `options`.

    The root logger passes everything and each handler applies its own
    level; `options.logger_levels` then raises or lowers individual loggers
    for every handler at once. Returns the installed handlers.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(
            level=options.console_level, debug_mode=options.debug, color=options.color
        )
    ]
    if options.log_path is not None:
        handlers.append(
            config_flight_recorder(
                options.log_path,
                capacity=options.flight_capacity,
                flush_on_close=options.force_flush,
            )
        )
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in options.logger_levels.items():
        logging.getLogger(name).setLevel(level)
    return handlers


def log_startup(
    logger: logging.Logger,
    *,
    app_version: str,
    env: str,
    options: LoggingOptions,
    handlers: list[logging.Handler],
) -> None:
    """One INFO summary line, then DEBUG diagnostics for bug reports."""
    logger.info(
        "EVENTSITE %s (%s): console=%s, flight-recorder=%s",
        app_version,
        env,
        logging.getLevelName(options.effective_console_level),
        "ON" if options.flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s, CWD: %s", os.getpid(), Path.cwd())
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if options.flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            options.log_path,
            options.flight_capacity,
            options.force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in options.logger_levels.items()}
        or "<none>",
    )
