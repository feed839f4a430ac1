"""
Background delivery executor.

A fixed pool of worker threads that runs fire-and-forget tasks (email
sends) off the caller's thread. A task that raises is logged and dropped;
the worker that ran it keeps serving the queue.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4

Task = Callable[[], Any]


class ExecutorUnavailable(Exception):
    """Raised when a task is submitted to an executor that has been shut down."""
    pass


class DeliveryExecutor:
    """
    Worker pool for asynchronous delivery tasks.

    Tasks are queued without limit and picked up by `max_workers` threads.
    No ordering is guaranteed between tasks and no completion handle is
    returned to the submitter.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS,
                 thread_name_prefix: str = 'email-delivery',
                 drain_on_exit: bool = True):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got: {max_workers}")

        self.max_workers = max_workers
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix
        )
        self._running = True
        self.drain_on_exit = drain_on_exit

        if not drain_on_exit:
            # Hooks run last-registered-first, so this runs before the
            # concurrent.futures hook that joins workers and drains queues
            threading._register_atexit(self._abandon_on_exit)

        logger.info(f"Delivery executor started: workers={max_workers}, drain_on_exit={drain_on_exit}")

    @property
    def is_running(self) -> bool:
        return self._running

    def submit(self, task: Task) -> None:
        """
        Schedule a task for asynchronous execution.

        Returns as soon as the task is queued.

        Args:
            task: Zero-argument callable

        Raises:
            ExecutorUnavailable: If the executor has been shut down
        """
        if not self._running:
            raise ExecutorUnavailable("Delivery executor has been shut down")

        try:
            self._pool.submit(self._run_task, task)
        except RuntimeError as e:
            # ThreadPoolExecutor refuses work after shutdown or interpreter exit
            raise ExecutorUnavailable(f"Delivery executor rejected task: {e}") from e

        logger.debug(f"Task submitted: {_task_name(task)}")

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        """
        Stop accepting tasks and release the worker threads.

        Args:
            wait: Block until running and queued tasks finish
            cancel_pending: Abandon queued tasks that have not started yet
        """
        if not self._running:
            return

        self._running = False
        logger.info(f"Shutting down delivery executor: wait={wait}, cancel_pending={cancel_pending}")
        self._pool.shutdown(wait=wait, cancel_futures=cancel_pending)
        logger.info("Delivery executor stopped")

    def _abandon_on_exit(self) -> None:
        """Drop queued tasks at interpreter exit; running tasks finish."""
        self.shutdown(wait=False, cancel_pending=True)

    def __enter__(self) -> 'DeliveryExecutor':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @staticmethod
    def _run_task(task: Task) -> None:
        """Run a task on a worker thread; errors stop here."""
        try:
            task()
        except Exception as e:
            logger.error(f"✗ Background task {_task_name(task)} failed: {e}", exc_info=True)


def _task_name(task: Task) -> str:
    return getattr(task, '__name__', repr(task))
