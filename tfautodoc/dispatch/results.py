"""Fan-in of task outcomes into a single error list."""

from __future__ import annotations

import logging
import queue

from ..core.models import TaskResult

logger = logging.getLogger(__name__)


class ResultAggregator:
    """Collects exactly ``expected`` task results.

    Errors are kept in arrival order, which follows worker completion timing
    rather than submission order. An empty error list means every task
    succeeded.
    """

    def __init__(self, expected: int) -> None:
        if expected < 0:
            raise ValueError(f"expected must be non-negative, got {expected}")
        self.expected = expected
        self.received = 0
        self._errors: list[Exception] = []

    @property
    def complete(self) -> bool:
        return self.received == self.expected

    @property
    def errors(self) -> list[Exception]:
        return list(self._errors)

    def add(self, result: TaskResult) -> None:
        """Record one task result.

        Raises:
            RuntimeError: If more results arrive than tasks were submitted
        """
        if self.received >= self.expected:
            raise RuntimeError(
                f"Received more results than submitted tasks ({self.expected})"
            )
        self.received += 1
        if result.error is not None:
            logger.debug(f"Task for {result.task.output_path} failed: {result.error}")
            self._errors.append(result.error)

    def collect(self, completions: queue.Queue[TaskResult]) -> list[Exception]:
        """Block until every expected result has been drained from *completions*.

        Returns:
            Errors of all failed tasks, in arrival order
        """
        while not self.complete:
            self.add(completions.get())
        return self.errors
