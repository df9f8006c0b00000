"""Serial in-memory build task queue."""

import asyncio
import logging
from typing import Callable, Optional

from landing_builder.core.domain.entities import BuildTask
from landing_builder.core.exceptions import BuildException
from .interfaces import BuildExecutorInterface

logger = logging.getLogger(__name__)

FatalErrorHandler = Callable[[BaseException], None]


def _log_fatal_error(exc: BaseException) -> None:
    logger.critical("Build queue worker crashed", exc_info=exc)


class SerialTaskQueue:
    """
    Unbounded FIFO queue of build tasks drained by exactly one worker.

    The worker awaits each execution before taking the next task, which is
    the only thing keeping builds from overlapping in the shared checkout.
    Build failures are logged and skipped; any other exception stops the
    worker and is handed to the fatal error handler.
    """

    def __init__(
        self,
        executor: BuildExecutorInterface,
        on_fatal_error: Optional[FatalErrorHandler] = None,
    ):
        """
        Initialize task queue.

        Args:
            executor: Executor every task is handed to
            on_fatal_error: Called with the exception that killed the worker
        """
        self._executor = executor
        self._on_fatal_error = on_fatal_error or _log_fatal_error
        self._queue: "asyncio.Queue[BuildTask]" = asyncio.Queue()
        self._pending = 0
        self._current: Optional[BuildTask] = None
        self._worker: Optional["asyncio.Task[None]"] = None

    def submit(self, task: BuildTask) -> None:
        """
        Append a task to the tail of the queue.

        Never blocks and never waits for the task to start.

        Args:
            task: Task to build
        """
        self._queue.put_nowait(task)
        self._pending += 1
        logger.info(
            f"[{task.task_id}] Queued build for landing page {task.landing_page_id} "
            f"(pending={self._pending})"
        )

    def pending_length(self) -> int:
        """Number of submitted tasks that have not finished executing."""
        return self._pending

    @property
    def current_task(self) -> Optional[BuildTask]:
        """Task the worker is executing right now, if any."""
        return self._current

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        """Launch the worker on the running event loop."""
        if self.is_running:
            return
        self._worker = asyncio.get_running_loop().create_task(
            self._run(), name="build-queue-worker"
        )
        self._worker.add_done_callback(self._on_worker_done)
        logger.info("Build queue worker started")

    async def stop(self) -> None:
        """Stop the worker, abandoning the in-flight and pending tasks."""
        if self._worker is None:
            return
        worker, self._worker = self._worker, None
        interrupted = self.current_task
        if not worker.done():
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass
        if interrupted is not None:
            logger.warning(
                f"[{interrupted.task_id}] Build for landing page "
                f"{interrupted.landing_page_id} interrupted by shutdown"
            )
        if self._pending:
            logger.warning(f"Build queue stopped with {self._pending} abandoned task(s)")
        else:
            logger.info("Build queue worker stopped")

    async def join(self) -> None:
        """Wait until every submitted task has finished executing."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            task = await self._queue.get()
            self._current = task
            cancelled = False
            try:
                await self._execute(task)
            except asyncio.CancelledError:
                cancelled = True
                raise
            finally:
                self._current = None
                # an interrupted task stays counted as unfinished
                if not cancelled:
                    self._pending -= 1
                self._queue.task_done()

    async def _execute(self, task: BuildTask) -> None:
        try:
            result = await self._executor.execute(task)
        except BuildException as e:
            logger.error(f"[{task.task_id}] Build task abandoned: {e.message}")
            return
        logger.info(f"[{task.task_id}] Build output written to {result.output_path}")

    def _on_worker_done(self, worker: "asyncio.Task[None]") -> None:
        if worker.cancelled():
            return
        exc = worker.exception()
        if exc is not None:
            self._on_fatal_error(exc)
