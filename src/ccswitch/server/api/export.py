"""Export API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.database import get_session
from ccswitch.server.auth import CurrentUser
from ccswitch.server.schemas.transfer import ExportFileResponse
from ccswitch.server.services.export import ExportService, UnknownExportTargetError

router = APIRouter()


def _attachment(content: bytes | str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/api/export/backup")
async def export_backup(
    user: CurrentUser, session: AsyncSession = Depends(get_session)
) -> Response:
    """Download every record collection as a zip of JSON files."""
    filename, data = await ExportService(session, user.id).export_backup()
    return _attachment(data, filename, "application/zip")


@router.get("/api/export/modules/{module}")
async def export_module(
    module: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Download one record collection as JSON."""
    try:
        filename, content = await ExportService(session, user.id).export_module(module)
    except UnknownExportTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _attachment(content, filename, "application/json")


@router.get("/api/export/{tool}/preview", response_model=list[ExportFileResponse])
async def preview_export(
    tool: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> list[ExportFileResponse]:
    """List the files a tool export would contain."""
    try:
        files = await ExportService(session, user.id).preview(tool)
    except UnknownExportTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return [
        ExportFileResponse(path=f.path, install_location=f.install_location, content=f.content)
        for f in files
    ]


@router.get("/api/export/{tool}")
async def export_tool(
    tool: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Download the config archive for one tool."""
    try:
        filename, data = await ExportService(session, user.id).export_tool(tool)
    except UnknownExportTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _attachment(data, filename, "application/zip")
