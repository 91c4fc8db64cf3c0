import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import count
from typing import Any, Awaitable, Optional

logger = logging.getLogger(__name__)


class TaskState(str, Enum):
    PENDING = "pending"
    SETTLED = "settled"
    CANCELLED = "cancelled"


@dataclass
class TaskOutcome:
    """What a submitted request resolved to."""
    request_id: int
    state: TaskState
    result: Any = None


@dataclass
class _PendingTask:
    request_id: int
    task: "asyncio.Task" = field(repr=False)


class SupersedingTaskRunner:
    """
    Runs one request at a time for a single consumer (a translator panel,
    the scan button). Submitting a new request cancels the one still pending,
    so a superseded request can never publish its result over a newer one.

    request -> pending -> settled (with result) | cancelled
    """

    def __init__(self, name: str):
        self.name = name
        self._ids = count(1)
        self._pending: Optional[_PendingTask] = None
        self.latest: Optional[TaskOutcome] = None

    @property
    def is_pending(self) -> bool:
        return self._pending is not None and not self._pending.task.done()

    async def submit(self, work: Awaitable[Any]) -> TaskOutcome:
        self.cancel_pending()

        request_id = next(self._ids)
        task = asyncio.ensure_future(work)
        self._pending = _PendingTask(request_id=request_id, task=task)
        logger.debug("%s: request %d pending", self.name, request_id)

        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not task.cancelled() or (current is not None and current.cancelling()):
                # the caller itself was cancelled, not just the work
                raise
            logger.info("%s: request %d cancelled", self.name, request_id)
            return TaskOutcome(request_id=request_id, state=TaskState.CANCELLED)
        finally:
            if self._pending is not None and self._pending.request_id == request_id:
                self._pending = None

        outcome = TaskOutcome(request_id=request_id, state=TaskState.SETTLED, result=result)
        if self.latest is None or self.latest.request_id < request_id:
            self.latest = outcome
        logger.debug("%s: request %d settled", self.name, request_id)
        return outcome

    def cancel_pending(self) -> bool:
        """Cancel the pending request, if any. Returns True if something was cancelled."""
        if not self.is_pending:
            return False
        self._pending.task.cancel()
        return True

    async def aclose(self) -> None:
        if self._pending is not None:
            task = self._pending.task
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            self._pending = None
