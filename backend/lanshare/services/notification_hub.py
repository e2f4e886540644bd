"""Live notification fan-out.

The hub keeps the set of connected browser sessions and pushes a
`file_uploaded` event to each of them when an upload completes. Delivery is
best-effort: nothing is persisted or replayed, and a client that joins later
only sees what `GET /files` returns.

A broadcast never waits on the network. Every ClientConnection owns a bounded
queue drained by its own sender task, which keeps per-connection order and
means one slow socket cannot hold up the others. A connection whose queue is
full is dropped.
"""
import asyncio
import logging

import anyio
from starlette.websockets import WebSocket

from lanshare.models.file_record import FileRecord
from lanshare.schemas.file import FileInfo, FileUploadedEvent

logger = logging.getLogger(__name__)

# "Try again later": the client fell too far behind.
CLOSE_TOO_SLOW = 1013


class ClientConnection:
    """One live WebSocket session subscribed to notifications."""

    def __init__(self, websocket: WebSocket, queue_size: int = 100):
        self.websocket = websocket
        self.queue: asyncio.Queue[dict] = asyncio.Queue(maxsize=queue_size)
        self.dropped = False
        self._scope: anyio.CancelScope | None = None

    def enqueue(self, message: dict) -> bool:
        """Queue a message for delivery. False if this connection is (now) dropped."""
        if self.dropped:
            return False
        try:
            self.queue.put_nowait(message)
        except asyncio.QueueFull:
            self.drop()
            return False
        return True

    def drop(self) -> None:
        self.dropped = True
        if self._scope is not None:
            self._scope.cancel()

    async def serve(self) -> None:
        """Run until the client disconnects or the connection is dropped."""
        if not self.dropped:
            async with anyio.create_task_group() as tg:
                self._scope = tg.cancel_scope
                tg.start_soon(self._send_loop)
                tg.start_soon(self._receive_loop)

        if self.dropped:
            try:
                await self.websocket.close(code=CLOSE_TOO_SLOW)
            except (RuntimeError, OSError):
                pass  # already closed

    async def _send_loop(self) -> None:
        try:
            while True:
                message = await self.queue.get()
                await self.websocket.send_json(message)
        except Exception as e:
            logger.debug(f"Live connection send failed: {e!r}")
        finally:
            self._scope.cancel()

    async def _receive_loop(self) -> None:
        # No client-to-server events; frames are read only to notice the disconnect.
        while True:
            message = await self.websocket.receive()
            if message["type"] == "websocket.disconnect":
                self._scope.cancel()
                return


class NotificationHub:
    """Registry of live connections, owned by the application."""

    def __init__(self):
        self._connections: set[ClientConnection] = set()

    def __len__(self) -> int:
        return len(self._connections)

    def register(self, connection: ClientConnection) -> None:
        self._connections.add(connection)
        logger.info("Live client connected (%d connected)", len(self._connections))

    def unregister(self, connection: ClientConnection) -> None:
        """Remove a connection. Safe to call more than once."""
        if connection in self._connections:
            self._connections.discard(connection)
            logger.info("Live client disconnected (%d connected)", len(self._connections))

    def broadcast(self, record: FileRecord) -> int:
        """Queue a file_uploaded event for every registered connection.

        Returns how many connections accepted it.
        """
        message = FileUploadedEvent(data=FileInfo.model_validate(record)).model_dump(
            mode="json", by_alias=True
        )
        delivered = 0
        for connection in list(self._connections):
            if connection.enqueue(message):
                delivered += 1
            else:
                logger.warning("Dropping live client that fell behind")
                self.unregister(connection)
        logger.info(f"Broadcast file_uploaded {record.name} to {delivered} client(s)")
        return delivered
