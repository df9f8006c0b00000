"""Build executor running the static site generator as a subprocess."""

import asyncio
import logging
import os
import shlex
import signal
import time
from typing import Dict, List, Mapping, Optional

from landing_builder.core.domain.entities import BuildResult, BuildTask
from landing_builder.core.exceptions import BuildException
from .interfaces import BuildExecutorInterface

logger = logging.getLogger(__name__)

LANDING_PAGE_ID_VAR = "LANDING_PAGE_ID"
BASE_URL_VAR = "BaseURL"

STDERR_TAIL_CHARS = 2000


class BuildExecutor(BuildExecutorInterface):
    """
    Runs the build tool once per task from the shared project checkout.

    Every task writes into the same output directory, so callers must never
    run two executions at once.
    """

    def __init__(
        self,
        project_path: str,
        command: str = "npx nuxt generate",
        output_path: str = ".output/public",
        base_environment: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize build executor.

        Args:
            project_path: Working directory of the build tool
            command: Build command line, split with shell quoting rules
            output_path: Directory, relative to project_path, the tool writes to
            base_environment: Environment to inherit, defaults to os.environ
        """
        self._project_path = project_path
        self._args = shlex.split(command)
        self._output_path = output_path
        self._base_environment = base_environment

        if not self._args:
            raise ValueError("Build command cannot be empty")

    @property
    def project_path(self) -> str:
        return self._project_path

    @property
    def command(self) -> List[str]:
        return list(self._args)

    def build_environment(self, task: BuildTask) -> Dict[str, str]:
        base = os.environ if self._base_environment is None else self._base_environment
        env = dict(base)
        env[LANDING_PAGE_ID_VAR] = task.landing_page_id
        env[BASE_URL_VAR] = task.base_url
        return env

    async def execute(self, task: BuildTask) -> BuildResult:
        logger.info(
            f"[{task.task_id}] Starting build for landing page: {task.landing_page_id}"
        )
        start_time = time.perf_counter()

        try:
            process = await asyncio.create_subprocess_exec(
                *self._args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._project_path,
                env=self.build_environment(task),
                start_new_session=os.name == "posix",
            )
        except FileNotFoundError as e:
            logger.error(f"[{task.task_id}] Build failed: command or directory not found: {e}")
            raise BuildException(task.task_id, f"command or directory not found: {e}") from e
        except OSError as e:
            logger.error(f"[{task.task_id}] Build failed: could not start build tool: {e}")
            raise BuildException(task.task_id, f"could not start build tool: {e}") from e

        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            await self._kill(process)
            logger.warning(
                f"[{task.task_id}] Build interrupted, killed build tool (pid {process.pid})"
            )
            raise
        elapsed = time.perf_counter() - start_time

        if process.returncode != 0:
            stderr_text = stderr.decode(errors="replace")[-STDERR_TAIL_CHARS:] if stderr else ""
            logger.error(
                f"[{task.task_id}] Build failed: exit code {process.returncode} "
                f"after {elapsed:.1f}s\n{stderr_text}"
            )
            raise BuildException(
                task.task_id,
                f"exit code {process.returncode}",
                exit_code=process.returncode,
                stderr=stderr_text,
            )

        logger.debug(f"[{task.task_id}] Build output:\n{stdout.decode(errors='replace') if stdout else ''}")
        logger.info(f"[{task.task_id}] Build completed successfully in {elapsed:.1f}s")
        return BuildResult(success=True, output_path=self._output_path)

    async def _kill(self, process: asyncio.subprocess.Process) -> None:
        """Kill the build tool and everything it spawned, then reap it."""
        if process.returncode is None:
            try:
                if os.name == "posix":
                    os.killpg(process.pid, signal.SIGKILL)
                else:
                    process.kill()
            except ProcessLookupError:
                pass
        await process.wait()
