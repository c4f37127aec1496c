"""
Audit Logger

Every change to the expense list is written to the structured log:
what was added or removed, where, how many records remain, and
whether the new list reached storage.

The audit logger is just another store observer. It never raises
into the store; a change that failed to persist is logged at warning.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from iexpense.models.change import StoreChange

if TYPE_CHECKING:
    from iexpense.store import ExpenseStore


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Minimum level name (e.g. "INFO")
        fmt: "json" for machine-readable lines, "console" for humans
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    logging.getLogger().setLevel(level.upper())

    renderer = (
        structlog.dev.ConsoleRenderer()
        if fmt == "console"
        else structlog.processors.JSONRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditLogger:
    """
    Logs every StoreChange it is handed.

    Attach it to a store with attach(); detach() stops it again.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger or structlog.get_logger("iexpense.audit")
        self._unsubscribe: Optional[Callable[[], None]] = None

    def __call__(self, change: StoreChange) -> None:
        self.log(change)

    def log(self, change: StoreChange) -> None:
        """Log one change."""
        log_dict = change.to_log_dict()

        if change.persisted:
            self._logger.info("expense_list_changed", **log_dict)
        else:
            self._logger.warning("expense_list_changed_unsaved", **log_dict)

    def attach(self, store: "ExpenseStore") -> None:
        """Subscribe to a store's changes."""
        self.detach()
        self._unsubscribe = store.subscribe(self)

    def detach(self) -> None:
        """Stop receiving changes, if attached."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
