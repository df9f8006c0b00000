"""Build endpoint routes."""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from landing_builder.api.dependencies import get_task_queue
from landing_builder.core.domain.entities import BuildTask
from landing_builder.core.domain.enums import TaskStatus
from landing_builder.core.exceptions import ValidationException
from landing_builder.core.services.task_queue import SerialTaskQueue
from .schemas import BuildQueuedResponse, BuildRequest

router = APIRouter(tags=["Builds"])


@router.post(
    "/build",
    response_model=BuildQueuedResponse,
    summary="Queue a landing page build",
    description="Adds a build to the serial queue and returns before it runs.",
    responses={
        200: {
            "description": "Build queued",
            "content": {
                "application/json": {
                    "example": {
                        "taskId": "3f2b8c1e-7a4d-4f6e-9b1a-2c5d8e0f1a2b",
                        "status": "queued",
                        "message": "Build request received and will be processed in queue",
                    }
                }
            },
        },
        400: {"description": "landingPageId is missing or empty"},
        500: {"description": "Internal server error"},
    },
)
async def queue_build(
    request: Optional[BuildRequest] = Body(None),
    task_queue: SerialTaskQueue = Depends(get_task_queue),
) -> BuildQueuedResponse:
    """
    Queue a build for a landing page.

    The build itself runs later on the queue worker; the caller only ever
    learns that the task was queued.

    Raises:
        ValidationException: If landingPageId is absent or empty
    """
    if request is None or not request.landing_page_id:
        raise ValidationException("landingPageId")

    task = BuildTask(landing_page_id=request.landing_page_id)
    task_queue.submit(task)

    return BuildQueuedResponse(
        task_id=task.task_id,
        status=TaskStatus.QUEUED.value,
        message="Build request received and will be processed in queue",
    )
