"""WebSocket router for UI revalidation events."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from src.core.logger.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    Clients connect here to receive {"type": "revalidate", "path": ...}
    events after a successful check-in. Incoming messages are ignored.
    """
    manager = websocket.app.state.ws_manager

    await manager.connect(websocket)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
        manager.disconnect(websocket)
