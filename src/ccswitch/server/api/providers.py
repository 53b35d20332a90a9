"""Provider API endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.common import EnabledUpdate, ProbeResponse
from ccswitch.server.schemas.provider import (
    ProviderCreate,
    ProviderPresetResponse,
    ProviderResponse,
    ProviderUpdate,
)
from ccswitch.server.services.prober import ConnectionProber
from ccswitch.server.services.providers import PROVIDER_PRESETS, ProviderService

router = APIRouter()


@router.get("/api/providers", response_model=list[ProviderResponse])
async def list_providers(
    user: CurrentUser, session: AsyncSession = Depends(get_session)
) -> list[ProviderResponse]:
    """List providers in display order."""
    providers = await ProviderService(session, user.id).list_providers()
    return [ProviderResponse.model_validate(provider) for provider in providers]


@router.post(
    "/api/providers", response_model=ProviderResponse, status_code=status.HTTP_201_CREATED
)
async def create_provider(
    payload: ProviderCreate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Create a provider."""
    provider = await ProviderService(session, user.id).create_provider(
        **payload.model_dump(by_alias=True)
    )
    return ProviderResponse.model_validate(provider)


@router.get("/api/providers/presets", response_model=list[ProviderPresetResponse])
async def list_presets(_user: CurrentUser) -> list[ProviderPresetResponse]:
    """List the built-in provider presets."""
    return [
        ProviderPresetResponse(index=index, **preset)
        for index, preset in enumerate(PROVIDER_PRESETS)
    ]


@router.post(
    "/api/providers/presets/{index}",
    response_model=ProviderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_preset(
    index: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Create a provider from a preset."""
    try:
        provider = await ProviderService(session, user.id).apply_preset(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail="Preset not found") from e
    return ProviderResponse.model_validate(provider)


@router.get("/api/providers/{provider_id}", response_model=ProviderResponse)
async def get_provider(
    provider_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Get a provider by ID."""
    provider = await ProviderService(session, user.id).get_provider(provider_id)
    if provider is None:
        raise HTTPException(status_code=404, detail="Provider not found")
    return ProviderResponse.model_validate(provider)


@router.put("/api/providers/{provider_id}", response_model=ProviderResponse)
async def update_provider(
    provider_id: int,
    payload: ProviderUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Update a provider."""
    provider = await ProviderService(session, user.id).update_provider(
        provider_id, **payload.model_dump(exclude_unset=True, by_alias=True)
    )
    if provider is None:
        raise HTTPException(status_code=404, detail="Provider not found")
    return ProviderResponse.model_validate(provider)


@router.patch("/api/providers/{provider_id}/enabled", response_model=ProviderResponse)
async def set_provider_enabled(
    provider_id: int,
    payload: EnabledUpdate,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Enable or disable a provider."""
    provider = await ProviderService(session, user.id).set_enabled(provider_id, payload.enabled)
    if provider is None:
        raise HTTPException(status_code=404, detail="Provider not found")
    return ProviderResponse.model_validate(provider)


@router.delete("/api/providers/{provider_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_provider(
    provider_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> None:
    """Delete a provider."""
    if not await ProviderService(session, user.id).delete_provider(provider_id):
        raise HTTPException(status_code=404, detail="Provider not found")


@router.post(
    "/api/providers/{provider_id}/duplicate",
    response_model=ProviderResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_provider(
    provider_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProviderResponse:
    """Copy a provider. A missing source is answered with 404 by the app handler."""
    provider = await ProviderService(session, user.id).duplicate_provider(provider_id)
    return ProviderResponse.model_validate(provider)


@router.post("/api/providers/{provider_id}/test", response_model=ProbeResponse)
async def test_provider(
    provider_id: int,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ProbeResponse:
    """Test that a stored provider's endpoint answers."""
    provider = await ProviderService(session, user.id).get_provider(provider_id)
    if provider is None:
        raise HTTPException(status_code=404, detail="Provider not found")

    async with ConnectionProber() as prober:
        result = await prober.probe_provider(
            provider.provider_type, provider.base_url, provider.api_key
        )
    return ProbeResponse(**asdict(result))
