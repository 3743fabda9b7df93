"""Concurrent rendering of all documents of a provider."""

from __future__ import annotations

import logging
import queue
import threading

from ..core.errors import AutodocError
from ..core.models import DocumentTask, ProviderSchema, TaskResult, TemplateBindings
from ..core.settings import AutodocSettings
from ..rendering.engine import TemplateSet
from .results import ResultAggregator
from .tasks import build_tasks

logger = logging.getLogger(__name__)


def execute_task(
    task: DocumentTask,
    templates: TemplateSet,
    completions: queue.Queue[TaskResult],
    file_mode: int = 0o644,
) -> None:
    """Render one document and report exactly one result to *completions*."""
    error: Exception | None = None
    try:
        logger.debug(f"Rendering {task.template_name} → {task.output_path}")
        templates.render(task.template_name, task.output_path, task.data, mode=file_mode)
        logger.info(f"Generated {task.output_path}")
    except AutodocError as e:
        error = e
    except Exception as e:
        logger.exception(f"Unexpected failure generating {task.output_path}")
        error = e
    completions.put(TaskResult(task=task, error=error))


def submit(
    tasks: list[DocumentTask],
    templates: TemplateSet,
    completions: queue.Queue[TaskResult],
    file_mode: int = 0o644,
) -> list[threading.Thread]:
    """Start one worker thread per task without waiting for any of them.

    A task whose thread cannot be started reports the failure as its result.
    """
    workers: list[threading.Thread] = []
    for task in tasks:
        worker = threading.Thread(
            target=execute_task,
            args=(task, templates, completions, file_mode),
            name=f"autodoc-{task.kind.value}-{task.output_path.stem}",
        )
        try:
            worker.start()
        except RuntimeError as e:
            logger.error(f"Cannot start worker for {task.output_path}: {e}")
            completions.put(TaskResult(task=task, error=e))
            continue
        workers.append(worker)
    return workers


def run(
    schema: ProviderSchema,
    templates: TemplateSet,
    settings: AutodocSettings,
    bindings: TemplateBindings | None = None,
) -> list[Exception]:
    """Render every document of *schema* concurrently.

    All tasks run to completion regardless of sibling failures.

    Args:
        schema: Provider schema tree
        templates: Loaded template set, shared read-only by all workers
        settings: Output locations and provider metadata
        bindings: Template names per document role

    Returns:
        Errors of all failed tasks; empty on success
    """
    bindings = bindings or TemplateBindings()
    tasks = build_tasks(schema, settings, bindings)
    logger.info(
        f"Rendering {len(tasks)} document(s): "
        f"{len(schema.resources)} resource(s), {len(schema.data_sources)} data source(s)"
    )

    completions: queue.Queue[TaskResult] = queue.Queue()
    workers = submit(tasks, templates, completions, settings.file_mode)

    errors = ResultAggregator(len(tasks)).collect(completions)
    for worker in workers:
        worker.join()

    logger.info(f"Completed: {len(tasks) - len(errors)} of {len(tasks)} document(s) generated")
    return errors
