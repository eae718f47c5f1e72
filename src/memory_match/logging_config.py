"""
Logging setup for the memory_match presentation layer.

Coordinator timers and event dispatch log at DEBUG; wins, new games and
shutdown at INFO.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "MEMORY_MATCH_LOG_LEVEL"
EVENT_BUS_LOGGER = "memory_match.events"


def setup_logging(
    level: Optional[str] = None,
    use_rich: bool = True,
    trace_events: bool = False,
) -> None:
    """
    Install a single handler on the root logger.

    Args:
        level: Log level name. Defaults to $MEMORY_MATCH_LOG_LEVEL, then INFO.
        use_rich: Rich colored output for development, plain lines otherwise
        trace_events: Let the event bus log every publish/subscribe at DEBUG.
            Off by default: one flip produces a burst of mirrored-field events.
    """
    level = level or os.getenv(LOG_LEVEL_ENV, "INFO")
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_rich:
        handler = RichHandler(
            console=Console(file=sys.stderr),
            level=numeric_level,
            show_path=True,
            rich_tracebacks=True,
            markup=False,
            log_time_format="[%H:%M:%S.%f]",
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    event_bus_level = numeric_level if trace_events else max(numeric_level, logging.INFO)
    logging.getLogger(EVENT_BUS_LOGGER).setLevel(event_bus_level)

    logging.getLogger(__name__).debug(
        f"Logging configured: level={level}, rich={use_rich}, trace_events={trace_events}"
    )


def setup_dev_logging(level: str = "DEBUG") -> None:
    """Development setup: rich output, event bus traffic included."""
    setup_logging(level=level, use_rich=True, trace_events=True)


def setup_prod_logging(level: str = "INFO") -> None:
    """Production setup: plain output, event bus traffic suppressed."""
    setup_logging(level=level, use_rich=False)
