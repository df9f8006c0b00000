"""Service interfaces for the build pipeline."""

from abc import ABC, abstractmethod
from typing import Dict

from landing_builder.core.domain.entities import BuildResult, BuildTask


class BuildExecutorInterface(ABC):
    """
    Interface for running one build task against the project checkout.

    Implementations must raise BuildException for every build-tool failure;
    any other exception escaping execute() is treated as fatal by the queue.
    """

    @abstractmethod
    def build_environment(self, task: BuildTask) -> Dict[str, str]:
        """
        Derive the environment the build tool runs with.

        Args:
            task: Task being built

        Returns:
            Inherited environment overlaid with the task's variables
        """
        pass

    @abstractmethod
    async def execute(self, task: BuildTask) -> BuildResult:
        """
        Run the build tool for a task and wait for it to exit.

        Args:
            task: Task to build

        Returns:
            Successful build result

        Raises:
            BuildException: If the tool exits non-zero or cannot be started
        """
        pass
