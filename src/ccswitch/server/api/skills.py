"""Skills and skills repository API endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.skill import (
    InstalledUpdate,
    ScanResponse,
    SkillResponse,
    SkillsRepoCreate,
    SkillsRepoResponse,
    SkillsRepoUpdate,
)
from ccswitch.server.services.base import RecordNotFoundError
from ccswitch.server.services.skill_scanner import SkillScanError
from ccswitch.server.services.skills import SkillService

router = APIRouter()


@router.get("/api/skills/repos", response_model=list[SkillsRepoResponse])
async def list_repos(
    user: CurrentUser, session: AsyncSession = Depends(get_session)
) -> list[SkillsRepoResponse]:
    """List skills repositories."""
    repos = await SkillService(session, user.id).list_repos()
    return [SkillsRepoResponse.model_validate(repo) for repo in repos]


@router.post(
    "/api/skills/repos", response_model=SkillsRepoResponse, status_code=status.HTTP_201_CREATED
)
async def create_repo(
    payload: SkillsRepoCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> SkillsRepoResponse:
    """Add a skills repository."""
    repo = await SkillService(session, user.id).create_repo(**payload.model_dump())
    return SkillsRepoResponse.model_validate(repo)


@router.put("/api/skills/repos/{repo_id}", response_model=SkillsRepoResponse)
async def update_repo(
    repo_id: int,
    payload: SkillsRepoUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> SkillsRepoResponse:
    """Update a skills repository."""
    repo = await SkillService(session, user.id).update_repo(
        repo_id, **payload.model_dump(exclude_unset=True)
    )
    if repo is None:
        raise HTTPException(status_code=404, detail="Skills repo not found")
    return SkillsRepoResponse.model_validate(repo)


@router.delete("/api/skills/repos/{repo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_repo(
    repo_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a skills repository and its skills."""
    if not await SkillService(session, user.id).delete_repo(repo_id):
        raise HTTPException(status_code=404, detail="Skills repo not found")


@router.post("/api/skills/repos/{repo_id}/scan", response_model=ScanResponse)
async def scan_repo(
    repo_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ScanResponse:
    """Discover new skills in a repository."""
    try:
        created = await SkillService(session, user.id).scan_repo(repo_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail="Skills repo not found") from e
    except SkillScanError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return ScanResponse(message=f"Found {created} new skills", skills_created=created)


@router.get("/api/skills", response_model=list[SkillResponse])
async def list_skills(
    user: CurrentUser,
    search: str | None = Query(None, description="Match name or description"),
    status_filter: Literal["all", "installed", "available"] = Query("all", alias="status"),
    repo_id: int | None = Query(None, description="Only skills from this repository"),
    session: AsyncSession = Depends(get_session),
) -> list[SkillResponse]:
    """List skills with optional filters."""
    installed = None if status_filter == "all" else status_filter == "installed"
    skills = await SkillService(session, user.id).list_skills(
        search=search, installed=installed, repo_id=repo_id
    )
    return [SkillResponse.model_validate(skill) for skill in skills]


@router.patch("/api/skills/{skill_id}/installed", response_model=SkillResponse)
async def set_skill_installed(
    skill_id: int,
    payload: InstalledUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> SkillResponse:
    """Mark a skill as installed or available."""
    skill = await SkillService(session, user.id).set_installed(skill_id, payload.installed)
    if skill is None:
        raise HTTPException(status_code=404, detail="Skill not found")
    return SkillResponse.model_validate(skill)
