"""WebSocket connection manager and handlers"""

from typing import Callable, Dict, List
from fastapi import WebSocket, WebSocketDisconnect, APIRouter
from datetime import datetime, timezone
import asyncio
import logging

logger = logging.getLogger(__name__)

# Create WebSocket router
router = APIRouter(tags=["websocket"])

class ConnectionManager:
    """
    Manages WebSocket connections. Each connection gets its own outbound
    queue so store callbacks can broadcast synchronously.
    """

    def __init__(self):
        self.active_connections: Dict[WebSocket, asyncio.Queue] = {}
        self._unsubscribers: List[Callable[[], None]] = []

    async def connect(self, websocket: WebSocket) -> asyncio.Queue:
        """Accept new connection"""
        await websocket.accept()
        queue: asyncio.Queue = asyncio.Queue()
        self.active_connections[websocket] = queue

        logger.info(f"View connected via WebSocket ({len(self.active_connections)} active)")

        # Send connection success
        await websocket.send_json({
            "type": "connection",
            "status": "connected",
            "timestamp": datetime.now(timezone.utc).isoformat()
        })
        return queue

    def disconnect(self, websocket: WebSocket):
        """Remove connection"""
        self.active_connections.pop(websocket, None)
        logger.info(f"View disconnected from WebSocket ({len(self.active_connections)} active)")

    def broadcast(self, message: dict):
        """Queue message for every connected view"""
        for queue in self.active_connections.values():
            queue.put_nowait(message)

    def attach(self, context) -> None:
        """Relay notices and store changes from the application context"""
        self._unsubscribers.append(context.notifications.subscribe(
            lambda notice: self.broadcast({
                "type": "notification",
                "data": notice.model_dump(mode="json"),
                "timestamp": datetime.now(timezone.utc).isoformat()
            })
        ))
        self._unsubscribers.append(context.store.subscribe(
            lambda: self.broadcast({"type": "store_changed"})
        ))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

async def _pump(websocket: WebSocket, queue: asyncio.Queue):
    while True:
        message = await queue.get()
        await websocket.send_json(message)

@router.websocket("/ws/notifications")
async def notifications_websocket(websocket: WebSocket):
    """Stream notices and store change events to a view"""
    manager: ConnectionManager = websocket.app.state.ws_manager
    queue = await manager.connect(websocket)
    sender = asyncio.create_task(_pump(websocket, queue))

    try:
        while True:
            data = await websocket.receive_json()
            if data.get("type") == "ping":
                queue.put_nowait({"type": "pong"})
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"WebSocket error: {str(e)}")
    finally:
        sender.cancel()
        manager.disconnect(websocket)
