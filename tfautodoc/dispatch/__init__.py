"""Fan-out of document tasks to worker threads and fan-in of their results."""

from .dispatcher import run
from .results import ResultAggregator
from .tasks import build_tasks

__all__ = ["ResultAggregator", "build_tasks", "run"]
