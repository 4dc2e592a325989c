"""
Live-connection tracking over WebSockets.
Holds one entry per open connection and fans mutation events out to them.
"""

import asyncio
import uuid
from typing import Any, Dict

from fastapi import WebSocket

from weekplanner.core.logger import logger

DEFAULT_SEND_TIMEOUT = 5.0


class ConnectionNotifier:
    """Tracks connected clients and broadcasts change events."""

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT):
        self.send_timeout = send_timeout
        self._connections: Dict[str, WebSocket] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a socket and start tracking it. Returns its connection id."""
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        self._connections[connection_id] = websocket
        logger.info(f"🔌 Client connected: {connection_id} (open={self.connection_count})")
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        """Stop tracking a connection. Unknown ids are ignored."""
        if self._connections.pop(connection_id, None) is not None:
            logger.info(
                f"🔌 Client disconnected: {connection_id} (open={self.connection_count})"
            )

    async def _send(self, connection_id: str, websocket: WebSocket, message: dict) -> bool:
        try:
            await asyncio.wait_for(websocket.send_json(message), timeout=self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(
                f"⚠️ Dropping connection {connection_id}: send timed out after {self.send_timeout}s"
            )
        except Exception as e:
            logger.warning(f"⚠️ Dropping connection {connection_id}: {e}")
        self.disconnect(connection_id)
        return False

    async def publish(self, event: str, data: Any) -> int:
        """
        Send `{"event", "data"}` to every tracked connection concurrently.

        A connection that fails or does not take the message within
        `send_timeout` seconds is dropped, so one stalled client holds a
        mutation up for at most that long.

        Returns:
            Number of connections the event was delivered to
        """
        message = {"event": event, "data": data}
        # Snapshot: connects and disconnects may interleave with the sends
        results = await asyncio.gather(
            *(
                self._send(connection_id, websocket, message)
                for connection_id, websocket in list(self._connections.items())
            )
        )
        delivered = sum(results)
        logger.debug(f"Published {event} to {delivered} connection(s)")
        return delivered
