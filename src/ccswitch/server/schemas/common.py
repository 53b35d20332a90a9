"""Response and payload shapes used by more than one router."""

from typing import Any

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str = Field(..., description="Human-readable message")


class ErrorResponse(BaseModel):
    """Body of every error produced by the application's own handlers."""

    error: str = Field(..., description="Short error category, e.g. 'Not Found'")
    message: str = Field(..., description="What went wrong")
    details: list[Any] | dict[str, Any] | None = Field(
        None, description="Per-field validation failures, when there are any"
    )

    def body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class HealthResponse(BaseModel):
    status: str = Field(..., description="Always 'healthy' while the process serves requests")
    version: str = Field(..., description="cc-switch package version")


class EnabledUpdate(BaseModel):
    """Toggle payload for enabled flags."""

    enabled: bool = Field(..., description="New enabled state")


class ProbeResponse(BaseModel):
    """Connection test result."""

    success: bool = Field(..., description="Whether the endpoint looks usable")
    message: str = Field(..., description="Human-readable outcome")
    latency_ms: int | None = Field(None, description="Wall-clock latency in milliseconds")
