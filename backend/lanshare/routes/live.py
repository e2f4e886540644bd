"""Live update channel (WebSocket)."""
from fastapi import APIRouter, Depends, WebSocket

from lanshare.config import Settings
from lanshare.dependencies import get_hub, get_settings
from lanshare.services.notification_hub import ClientConnection, NotificationHub

router = APIRouter(tags=["live"])


@router.websocket("/ws")
async def live_updates(
    websocket: WebSocket,
    hub: NotificationHub = Depends(get_hub),
    settings: Settings = Depends(get_settings),
):
    """Push a `file_uploaded` event for every upload that completes while connected."""
    connection = ClientConnection(websocket, queue_size=settings.LIVE_QUEUE_SIZE)
    # Registered before the handshake completes, so nothing uploaded after the
    # client sees "open" can be missed.
    hub.register(connection)
    try:
        await websocket.accept()
        await connection.serve()
    finally:
        hub.unregister(connection)
