"""Prompt and prompt optimizer API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.server.auth import CurrentUser
from ccswitch.server.llm.gateway import (
    AIGatewayError,
    AIGatewayQuotaError,
    AIGatewayRateLimitError,
)
from ccswitch.server.schemas.prompt import (
    ActiveUpdate,
    OptimizeHistoryResponse,
    OptimizeRequest,
    OptimizeResponse,
    PromptCreate,
    PromptResponse,
    PromptUpdate,
)
from ccswitch.server.services.optimizer import OptimizerError, PromptOptimizer
from ccswitch.server.services.prompts import PromptService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/prompts", response_model=list[PromptResponse])
async def list_prompts(
    user: CurrentUser, session: AsyncSession = Depends(get_session)
) -> list[PromptResponse]:
    """List prompts."""
    prompts = await PromptService(session, user.id).list_prompts()
    return [PromptResponse.model_validate(prompt) for prompt in prompts]


@router.post("/api/prompts", response_model=PromptResponse, status_code=status.HTTP_201_CREATED)
async def create_prompt(
    payload: PromptCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> PromptResponse:
    """Create a prompt."""
    prompt = await PromptService(session, user.id).create_prompt(**payload.model_dump())
    return PromptResponse.model_validate(prompt)


@router.post("/api/prompts/optimize", response_model=OptimizeResponse)
async def optimize_prompt(
    payload: OptimizeRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> OptimizeResponse:
    """Optimize, refine or evaluate a prompt through the AI gateway."""
    optimizer = PromptOptimizer(session, user.id)
    try:
        result = await optimizer.run(
            payload.action,
            payload.prompt,
            mode=payload.mode,
            template=payload.template,
            optimized_prompt=payload.optimized_prompt,
            feedback=payload.feedback,
        )
    except OptimizerError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except AIGatewayRateLimitError as e:
        raise HTTPException(status_code=429, detail=str(e)) from e
    except AIGatewayQuotaError as e:
        raise HTTPException(status_code=402, detail=str(e)) from e
    except AIGatewayError as e:
        logger.error(f"AI gateway error: {e}")
        raise HTTPException(status_code=502, detail="AI service error") from e

    return OptimizeResponse(result=result.result, analysis=result.analysis, template=result.template)


@router.get("/api/prompts/optimize/history", response_model=list[OptimizeHistoryResponse])
async def optimize_history(
    user: CurrentUser,
    limit: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> list[OptimizeHistoryResponse]:
    """List recent optimizer calls."""
    entries = await PromptOptimizer(session, user.id).history(limit)
    return [OptimizeHistoryResponse.model_validate(entry) for entry in entries]


@router.get("/api/prompts/{prompt_id}", response_model=PromptResponse)
async def get_prompt(
    prompt_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> PromptResponse:
    """Get a prompt by ID."""
    prompt = await PromptService(session, user.id).get_prompt(prompt_id)
    if prompt is None:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return PromptResponse.model_validate(prompt)


@router.put("/api/prompts/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: int,
    payload: PromptUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> PromptResponse:
    """Update a prompt."""
    prompt = await PromptService(session, user.id).update_prompt(
        prompt_id, **payload.model_dump(exclude_unset=True)
    )
    if prompt is None:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return PromptResponse.model_validate(prompt)


@router.patch("/api/prompts/{prompt_id}/active", response_model=PromptResponse)
async def set_prompt_active(
    prompt_id: int,
    payload: ActiveUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> PromptResponse:
    """Activate or deactivate a prompt."""
    prompt = await PromptService(session, user.id).set_active(prompt_id, payload.is_active)
    if prompt is None:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return PromptResponse.model_validate(prompt)


@router.delete("/api/prompts/{prompt_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prompt(
    prompt_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a prompt."""
    if not await PromptService(session, user.id).delete_prompt(prompt_id):
        raise HTTPException(status_code=404, detail="Prompt not found")
