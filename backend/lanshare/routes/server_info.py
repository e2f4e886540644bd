"""Server info route: where to reach this server, as text and as a QR code."""
from fastapi import APIRouter, Depends

from lanshare.config import Settings
from lanshare.dependencies import get_settings
from lanshare.schemas.file import ErrorResponse
from lanshare.schemas.server_info import ServerInfo
from lanshare.services.server_info import qr_data_url, server_url

router = APIRouter(tags=["server"])


@router.get(
    "/server-info",
    response_model=ServerInfo,
    responses={500: {"model": ErrorResponse}},
)
async def get_server_info(settings: Settings = Depends(get_settings)):
    url = server_url(settings.API_PORT, settings.PUBLIC_URL)
    return ServerInfo(url=url, qr_code_url=qr_data_url(url))
