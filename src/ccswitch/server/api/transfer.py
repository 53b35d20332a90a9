"""Import and deep link API endpoints."""

import os
from typing import Any

from fastapi import APIRouter, Body, Depends, File, HTTPException, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.data.records import ProviderRecord
from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.transfer import (
    DeepLinkProvider,
    DeepLinkRequest,
    DeepLinkResponse,
    ImportResultResponse,
)
from ccswitch.server.services.providers import ProviderService
from ccswitch.server.services.transfer import (
    DeepLinkError,
    ImportResult,
    ImportService,
    RecordImportError,
    build_deep_link,
    decode_deep_link,
    encode_deep_link,
)

router = APIRouter()


def _result_to_response(result: ImportResult) -> ImportResultResponse:
    return ImportResultResponse(kind=result.kind, imported=result.imported, skipped=result.skipped)


@router.post("/api/import", response_model=ImportResultResponse)
async def import_records(
    user: CurrentUser,
    payload: Any = Body(...),
    session: AsyncSession = Depends(get_session),
) -> ImportResultResponse:
    """Import a previously exported JSON array of one record kind."""
    try:
        result = await ImportService(session, user.id).import_records(payload)
    except RecordImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _result_to_response(result)


@router.post("/api/import/backup", response_model=list[ImportResultResponse])
async def import_backup(
    user: CurrentUser,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_session),
) -> list[ImportResultResponse]:
    """Restore a backup archive."""
    data = await file.read()
    try:
        results = await ImportService(session, user.id).import_backup(data)
    except RecordImportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [_result_to_response(result) for result in results]


@router.get("/api/import/deep-link", response_model=DeepLinkResponse)
async def create_deep_link(
    request: Request,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> DeepLinkResponse:
    """Build a link that shares the user's enabled providers without their keys."""
    providers = [
        ProviderRecord.model_validate(provider)
        for provider in await ProviderService(session, user.id).list_providers()
    ]
    origin = os.getenv("CCSWITCH_PUBLIC_URL") or str(request.base_url)
    return DeepLinkResponse(
        link=build_deep_link(origin, providers),
        data=encode_deep_link(providers),
        providers=sum(1 for provider in providers if provider.enabled),
    )


@router.post("/api/import/deep-link/decode", response_model=list[DeepLinkProvider])
async def decode_link(payload: DeepLinkRequest, _user: CurrentUser) -> list[DeepLinkProvider]:
    """Show what a deep link would import."""
    try:
        entries = decode_deep_link(payload.data)
    except DeepLinkError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return [DeepLinkProvider(**entry) for entry in entries]


@router.post(
    "/api/import/deep-link",
    response_model=ImportResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def import_deep_link(
    payload: DeepLinkRequest,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> ImportResultResponse:
    """Import the providers carried by a deep link."""
    try:
        result = await ImportService(session, user.id).import_deep_link(payload.data)
    except DeepLinkError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _result_to_response(result)
