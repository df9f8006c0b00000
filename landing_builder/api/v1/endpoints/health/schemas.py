"""Health check API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response schema."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(
        ...,
        description="Service health status",
        examples=["healthy"],
    )
    queue_length: int = Field(
        ...,
        ge=0,
        alias="queueLength",
        description="Builds submitted and not yet finished",
        examples=[2],
    )
