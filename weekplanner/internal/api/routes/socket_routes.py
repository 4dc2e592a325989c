"""
Live-connection WebSocket route.
Clients connect to receive change events; messages they send are ignored.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from weekplanner.core.logger import logger
from weekplanner.services import ConnectionNotifier

router = APIRouter(tags=["Live"])


@router.websocket("/ws")
async def live_connection(websocket: WebSocket):
    notifier: ConnectionNotifier = websocket.app.state.notifier
    connection_id = await notifier.connect(websocket)
    try:
        await websocket.send_json({"event": "connected", "data": {"id": connection_id}})
        while True:
            message = await websocket.receive_text()
            logger.debug(f"Ignoring message from {connection_id}: {message[:100]}")
    except WebSocketDisconnect:
        logger.debug(f"WebSocket closed by client: {connection_id}")
    finally:
        notifier.disconnect(connection_id)
