"""FastAPI dependency injection setup."""

from fastapi import Request

from landing_builder.core.services.task_queue import SerialTaskQueue


def get_task_queue(request: Request) -> SerialTaskQueue:
    """
    Provide the process-wide build queue for dependency injection.

    Args:
        request: Incoming request, whose app owns the queue

    Returns:
        SerialTaskQueue: Queue created by the application factory
    """
    return request.app.state.task_queue
