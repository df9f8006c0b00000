"""Common fixtures for integration tests."""

import asyncio
import threading
import time
from typing import Dict, List, Tuple

import pytest
from fastapi.testclient import TestClient

from landing_builder.core.domain.entities import BuildResult, BuildTask
from landing_builder.core.exceptions import BuildException
from landing_builder.core.services.build_executor import BuildExecutor
from landing_builder.core.services.interfaces import BuildExecutorInterface
from landing_builder.main import create_app
from landing_builder.settings import Settings


class FakeExecutor(BuildExecutorInterface):
    """
    Executor standing in for the site generator.

    Environments come from the real executor. Builds block until the test
    sets ``gate``; ids listed in ``fail_for`` raise BuildException after
    running.
    """

    def __init__(self):
        self.gate = threading.Event()
        self.gate.set()
        self.fail_for = set()
        self.events: List[Tuple[str, str]] = []
        self.environments: List[Dict[str, str]] = []
        self._real = BuildExecutor(".", base_environment={})

    def build_environment(self, task: BuildTask) -> Dict[str, str]:
        return self._real.build_environment(task)

    async def execute(self, task: BuildTask) -> BuildResult:
        self.events.append(("start", task.landing_page_id))
        self.environments.append(self.build_environment(task))
        while not self.gate.is_set():
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.01)
        self.events.append(("end", task.landing_page_id))

        if task.landing_page_id in self.fail_for:
            raise BuildException(task.task_id, "exit code 1", exit_code=1)
        return BuildResult(success=True, output_path=".output/public")


def _wait_for_empty_queue(client: TestClient, timeout: float = 5.0) -> None:
    """Poll the health endpoint until every queued build has finished."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if client.get("/health").json()["queueLength"] == 0:
            return
        time.sleep(0.01)
    raise AssertionError("build queue did not drain in time")


@pytest.fixture
def test_settings(tmp_path):
    """Create settings pointing at a temporary checkout without file logging."""
    return Settings(_env_file=None, project_path=str(tmp_path), log_dir="")


@pytest.fixture
def fake_executor():
    """Create a fake build executor."""
    return FakeExecutor()


@pytest.fixture
def fatal_errors():
    """Collect errors passed to the fatal error handler."""
    return []


@pytest.fixture
def app(test_settings, fake_executor, fatal_errors):
    """Create application wired to the fake executor."""
    return create_app(
        test_settings,
        executor=fake_executor,
        on_fatal_error=fatal_errors.append,
    )


@pytest.fixture
def client(app):
    """Create test client running the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def wait_for_empty_queue(client):
    """Return a helper that blocks until the build queue drains."""
    return lambda timeout=5.0: _wait_for_empty_queue(client, timeout)
