"""Online-user list fan-out."""

import asyncio
import logging

from src.relay import events
from src.relay.registry import PresenceRegistry
from src.relay.transport import ConnectionTable, Transport

logger = logging.getLogger(__name__)


class BroadcastNotifier:
    def __init__(self, registry: PresenceRegistry, connections: ConnectionTable) -> None:
        self._registry = registry
        self._connections = connections

    async def _send(self, connection_id: str, transport: Transport, frame: dict) -> bool:
        try:
            await transport.send_json(frame)
        except Exception:
            logger.warning("online-users send failed on connection %s", connection_id, exc_info=True)
            return False
        return True

    async def broadcast(self) -> int:
        """Send the current snapshot to every live connection. Returns how many sends succeeded."""
        frame = events.online_users(self._registry.snapshot())
        targets = self._connections.items()
        if not targets:
            return 0
        results = await asyncio.gather(*(self._send(cid, t, frame) for cid, t in targets))
        return sum(results)

    async def send_snapshot(self, connection_id: str) -> bool:
        transport = self._connections.get(connection_id)
        if transport is None:
            return False
        return await self._send(connection_id, transport, events.online_users(self._registry.snapshot()))
