"""Notifies the UI that cached pages are stale after a check-in."""

from src.core.logger.logger import get_logger
from src.core.service.websocket.manager import ConnectionManager

logger = get_logger(__name__)


class CacheInvalidator:
    """Broadcasts revalidate events to connected WebSocket clients."""

    def __init__(self, ws_manager: ConnectionManager):
        self.ws_manager = ws_manager

    async def invalidate(self, route: str) -> None:
        """
        Tell clients to refetch ``route``.

        Args:
            route: UI path whose cached content is stale
        """
        delivered = await self.ws_manager.broadcast({
            "type": "revalidate",
            "path": route
        })
        logger.debug(
            "Revalidate event broadcast",
            extra={"path": route, "clients": delivered}
        )
