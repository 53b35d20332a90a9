"""Schemas for skills API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SkillsRepoCreate(BaseModel):
    """Skills repository create payload."""

    owner: str = Field(..., min_length=1, max_length=100, description="GitHub owner")
    repo: str = Field(..., min_length=1, max_length=100, description="GitHub repository")
    branch: str = Field("main", min_length=1, max_length=50)
    subdirectory: str | None = Field(None, description="Directory holding the skills")
    is_default: bool = False


class SkillsRepoUpdate(BaseModel):
    """Skills repository update payload. Only given fields change."""

    owner: str | None = Field(None, min_length=1, max_length=100)
    repo: str | None = Field(None, min_length=1, max_length=100)
    branch: str | None = Field(None, min_length=1, max_length=50)
    subdirectory: str | None = None
    is_default: bool | None = None


class SkillsRepoResponse(BaseModel):
    """Skills repository response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner: str
    repo: str
    branch: str
    subdirectory: str | None = None
    is_default: bool
    created_at: datetime | None = None


class SkillResponse(BaseModel):
    """Skill response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    installed: bool
    repo_id: int | None = None


class InstalledUpdate(BaseModel):
    """Toggle payload for the installed flag."""

    installed: bool


class ScanResponse(BaseModel):
    """Scan response payload."""

    message: str = Field(..., description="Scan result message")
    skills_created: int = Field(..., description="Number of skills discovered")
