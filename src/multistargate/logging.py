"""Opt-in logging setup for code driving a MULTISTARGATE chain.

Library modules only call ``logging.getLogger(__name__)`` and nothing here runs
on import. A test suite or script that wants readable output calls
`configure_logging`, which installs:

- a Rich console handler on stderr, tagging records from other libraries
  (SQLAlchemy mostly) with a ``[library]`` origin;
- optionally a "flight recorder": every record, DEBUG included, is kept in
  memory and only written to a file once something goes wrong.
"""

from __future__ import annotations

import logging
import platform
import sys
from logging.handlers import MemoryHandler
from typing import TYPE_CHECKING

import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

from multistargate import __version__

if TYPE_CHECKING:
    from pathlib import Path

    from multistargate.environment import Chain

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "multistargate"

CONSOLE_FORMAT = "%(prefix)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "%(relativeCreated)6dms %(name)s: %(message)s"
RECORDER_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(threadName)s] %(message)s"


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``[library]`` for records from other packages.

    ``sqlalchemy.engine.Engine`` becomes ``[sqlalchemy]``; records of this
    package get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.partition(".")[0]
        record.prefix = "" if top == PROJECT_PREFIX else f"[{top}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    In debug mode every record is shown with its logger name and source
    location; otherwise records are filtered at `level` and tagged with their
    origin by `ThirdPartyPrefixFilter`.
    """
    console = Console(stderr=True, color_system="auto" if color else None)
    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter(VERBOSE_CONSOLE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a memory buffer that dumps its records to `path` on trouble.

    Up to `capacity` records are held; the buffer is written out when it
    fills up or when a record at `flush_level` or above arrives. With
    `flush_on_close`, whatever is left is also written when the handler is
    closed. Handy to keep the routing trail of a failing scenario without
    flooding the console.

    Args:
        path: File receiving flushed records (truncated on creation).
        capacity: Records kept in memory between flushes.
        flush_level: Level that triggers a flush.
        flush_on_close: Also flush when the handler is closed.

    Returns:
        MemoryHandler: The recorder; its ``target`` is the file handler.
    """
    sink = logging.FileHandler(path, mode="w", encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter(RECORDER_FORMAT))
    return MemoryHandler(
        capacity, flushLevel=flush_level, target=sink, flushOnClose=flush_on_close
    )


def configure_logging(
    level: int = logging.INFO,
    *,
    debug_mode: bool = False,
    color: bool = True,
    flight_recorder_path: Path | None = None,
    logger_levels: dict[str, int] | None = None,
) -> list[logging.Handler]:
    """Attach the console handler (and optionally a flight recorder) to the root logger.

    Previously attached handlers are replaced, so calling this twice does not
    duplicate output.

    Args:
        level: Console level.
        debug_mode: See `config_console_handler`.
        color: See `config_console_handler`.
        flight_recorder_path: When set, also buffer every record for this file.
        logger_levels: Per-logger level overrides, e.g. ``{"sqlalchemy": WARNING}``.

    Returns:
        The handlers now attached to the root logger.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level, debug_mode=debug_mode, color=color)
    ]
    if flight_recorder_path is not None:
        handlers.append(config_flight_recorder(flight_recorder_path))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    # the root passes everything; handlers do the filtering
    root.setLevel(logging.DEBUG if flight_recorder_path is not None else level)

    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level)

    return handlers


def log_startup(logger: logging.Logger, chain: Chain) -> None:
    """Log a one-line summary of `chain` and detailed diagnostics.

    The INFO line names the version, the chain id, the storage backend and
    the registered applications. Python, platform and SQLAlchemy versions and
    the current block follow at DEBUG level.

    Args:
        logger: Logger used to emit startup messages.
        chain: The chain to describe.
    """
    logger.info(
        "MULTISTARGATE %s: chain=%s, storage=%s, applications=%s",
        __version__,
        chain.block.chain_id,
        type(chain.uow).__name__,
        ", ".join(chain.dispatcher.registry.names()) or "<none>",
    )
    logger.debug(
        "Runtime: Python %s on %s %s, SQLAlchemy %s",
        sys.version.split()[0],
        platform.system(),
        platform.release(),
        sqlalchemy.__version__,
    )
    logger.debug("Address prefix: %s", getattr(chain.api, "prefix", "<unknown>"))
    logger.debug(
        "Block: height=%d, time=%s", chain.block.height, chain.block.time.isoformat()
    )
