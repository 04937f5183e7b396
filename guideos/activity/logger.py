"""
Activity Logger

DESIGN DECISION: Every mutation and every fail-open recovery is logged.
The core swallows bad data and invalid input by contract, so the log is
the only place those decisions become visible.

The activity logger:
- Is synchronous, like the rest of the core
- Never raises into the caller
"""

import logging
from typing import Optional

import structlog

from guideos.models.activity import ActivityEvent, ActivitySeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at `level`."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("guideos").setLevel(level.upper())


class ActivityLogger:
    """Writes ActivityEvents to the structured local log."""

    def __init__(self, logger_name: str = "guideos.activity"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: ActivityEvent) -> None:
        """Log an event at the level matching its severity."""
        log_dict = event.to_log_dict()

        try:
            if event.severity is ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity is ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity is ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception:
            # A broken log handler must not take a save down with it
            logging.getLogger(__name__).exception("activity log write failed")


_default_logger: Optional[ActivityLogger] = None


def get_activity_logger() -> ActivityLogger:
    """Shared logger used when a component is not handed one."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ActivityLogger()
    return _default_logger
