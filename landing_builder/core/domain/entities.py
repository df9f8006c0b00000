"""Domain entities for the build server."""

import uuid
from dataclasses import dataclass, field


def new_task_id() -> str:
    """Generate an opaque task identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class BuildTask:
    """
    One requested build of a landing page variant.

    Attributes:
        landing_page_id: Identifier selecting which site variant to build
        task_id: Unique identifier used for log correlation
    """

    landing_page_id: str
    task_id: str = field(default_factory=new_task_id)

    def __post_init__(self) -> None:
        """Validate task data after initialization."""
        if not self.landing_page_id:
            raise ValueError("Landing page id cannot be empty")
        if not self.task_id:
            raise ValueError("Task id cannot be empty")

    @property
    def base_url(self) -> str:
        """Path prefix the generated site is served under."""
        return f"/landing-page/{self.landing_page_id}"


@dataclass(frozen=True)
class BuildResult:
    """
    Outcome of one executed build.

    Attributes:
        success: Whether the build tool exited cleanly
        output_path: Relative directory holding the generated files
    """

    success: bool
    output_path: str
