"""WebSocket connection manager for pushing UI events."""

from typing import List
from fastapi import WebSocket

from src.core.logger.logger import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """Manages WebSocket connections and broadcasting."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        """
        Accept a new WebSocket connection.

        Args:
            websocket: The WebSocket connection
        """
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info("WebSocket client connected", extra={"clients": len(self.active_connections)})

    def disconnect(self, websocket: WebSocket):
        """
        Remove a WebSocket connection.

        Args:
            websocket: The WebSocket connection to remove
        """
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info("WebSocket client disconnected", extra={"clients": len(self.active_connections)})

    async def broadcast(self, data: dict) -> int:
        """
        Send a message to all connected clients.

        Clients whose send fails are dropped.

        Args:
            data: The data to broadcast (will be JSON serialized)

        Returns:
            Number of clients the message was delivered to
        """
        delivered = 0
        disconnected = []
        for connection in list(self.active_connections):
            try:
                await connection.send_json(data)
                delivered += 1
            except Exception as e:
                logger.warning(f"WebSocket send failed: {e}")
                disconnected.append(connection)

        for connection in disconnected:
            self.disconnect(connection)

        return delivered

    def get_connection_count(self) -> int:
        """Get the number of active connections."""
        return len(self.active_connections)
