"""Build endpoint schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BuildRequest(BaseModel):
    """Request schema for queueing a landing page build."""

    model_config = ConfigDict(populate_by_name=True)

    landing_page_id: Optional[str] = Field(
        None,
        alias="landingPageId",
        description="Identifier of the landing page variant to build",
        examples=["spring-sale"],
    )


class BuildQueuedResponse(BaseModel):
    """Response schema for an accepted build request."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(
        ...,
        alias="taskId",
        description="Identifier of the queued build task",
        examples=["3f2b8c1e-7a4d-4f6e-9b1a-2c5d8e0f1a2b"],
    )

    status: str = Field(
        ...,
        description="Task status at submission time",
        examples=["queued"],
    )

    message: str = Field(
        ...,
        description="Status message",
        examples=["Build request received and will be processed in queue"],
    )
