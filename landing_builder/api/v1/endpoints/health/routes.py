"""Health check API routes."""

from fastapi import APIRouter, Depends

from landing_builder.api.dependencies import get_task_queue
from landing_builder.core.domain.enums import HealthStatus
from landing_builder.core.services.task_queue import SerialTaskQueue
from .schemas import HealthResponse

router = APIRouter(tags=["Health Check"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report service health and the current build queue length.",
    responses={
        200: {"description": "Service is healthy"},
    },
)
async def health_check(
    task_queue: SerialTaskQueue = Depends(get_task_queue),
) -> HealthResponse:
    """Return service status together with the number of unfinished builds."""
    return HealthResponse(
        status=HealthStatus.HEALTHY.value,
        queue_length=task_queue.pending_length(),
    )
