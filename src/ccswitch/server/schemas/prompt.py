"""Schemas for prompt and prompt optimizer API."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ccswitch.data.models.prompt import TargetFile


class PromptCreate(BaseModel):
    """Prompt create payload."""

    name: str = Field(..., min_length=1, max_length=255)
    target_file: TargetFile = Field(TargetFile.CLAUDE, description="Instruction file")
    content: str = Field("", description="Markdown content")
    is_active: bool = False


class PromptUpdate(BaseModel):
    """Prompt update payload. Only given fields change."""

    name: str | None = Field(None, min_length=1, max_length=255)
    target_file: TargetFile | None = None
    content: str | None = None
    is_active: bool | None = None


class PromptResponse(BaseModel):
    """Prompt response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    target_file: TargetFile
    content: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ActiveUpdate(BaseModel):
    """Toggle payload for the active flag."""

    is_active: bool


class OptimizeRequest(BaseModel):
    """Prompt optimizer request."""

    action: Literal["optimize", "iterate", "evaluate"] = "optimize"
    prompt: str = Field(..., min_length=1, description="Original prompt")
    optimized_prompt: str | None = Field(None, description="Previous output, for iterate")
    template: str | None = Field(None, description="general, academic or creative")
    mode: Literal["system", "user"] = "system"
    feedback: str | None = Field(None, description="Refinement direction, for iterate")


class OptimizeResponse(BaseModel):
    """Prompt optimizer result."""

    result: str
    analysis: str | None = None
    template: str


class OptimizeHistoryResponse(BaseModel):
    """Stored optimizer call."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    original_prompt: str
    optimized_prompt: str
    template: str
    mode: str
    action: str
    feedback: str | None = None
    analysis: str | None = None
    created_at: datetime | None = None
