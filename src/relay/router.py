"""Point-to-point relay: forward a payload to the recipient's live connection."""

import logging
from typing import Any

from src.relay import events
from src.relay.registry import PresenceRegistry
from src.relay.transport import ConnectionTable

logger = logging.getLogger(__name__)


class RelayRouter:
    """At-most-once, best-effort delivery. Nothing is queued or stored."""

    def __init__(self, registry: PresenceRegistry, connections: ConnectionTable) -> None:
        self._registry = registry
        self._connections = connections

    async def relay(self, sender_id: str, recipient_id: str, payload: Any) -> bool:
        """Send `payload` to `recipient_id` as a msg-receive frame.

        Returns False when the recipient is offline or the send failed. The
        sender is never told either way.
        """
        connection_id = self._registry.lookup(recipient_id)
        transport = self._connections.get(connection_id) if connection_id else None
        if transport is None:
            logger.debug("Dropped relay %s -> %s: recipient offline", sender_id, recipient_id)
            return False

        try:
            await transport.send_json(events.msg_receive(payload))
        except Exception:
            logger.warning("Relay %s -> %s failed on connection %s", sender_id, recipient_id, connection_id, exc_info=True)
            return False
        return True
