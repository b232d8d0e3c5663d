"""Re-entrancy guard with all-or-nothing rollback.

Every public mutating entry point runs inside `OperationGuard.enter()`.
While an operation is in progress any nested entry raises ReentrancyError.
If the operation raises, every journaled participant is restored to its
state at entry before the error propagates.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from lp_auction.errors import ReentrancyError
from lp_auction.interfaces import Journaled

logger = structlog.get_logger()


class OperationGuard:
    """Single-holder lock scoped to one operation."""

    def __init__(self) -> None:
        self._operation: str | None = None

    @property
    def in_progress(self) -> str | None:
        """Name of the operation currently holding the guard."""
        return self._operation

    @contextmanager
    def enter(self, operation: str, participants: Iterable[Any] = ()) -> Iterator[None]:
        if self._operation is not None:
            raise ReentrancyError(
                f"Cannot enter {operation} while {self._operation} is in progress"
            )

        self._operation = operation
        snapshots = [(p, p.snapshot()) for p in participants if isinstance(p, Journaled)]
        try:
            yield
        except BaseException:
            for participant, snapshot in reversed(snapshots):
                participant.restore(snapshot)
            logger.debug("operation_rolled_back", operation=operation, participants=len(snapshots))
            raise
        finally:
            self._operation = None
