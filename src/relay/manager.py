"""Connection lifecycle for the relay socket.

Each connection moves Connected -> Identified -> Disconnected. The manager
owns the presence registry and the live transports and hands both to the
router and the notifier. It runs on a single event loop; the registry lock
only matters if something outside the loop touches presence.

Broadcast policy:
    - on identify: the online-user list goes to every connection;
    - on raw connect: only the new connection gets the list, unless
      ``broadcast_on_connect`` is set;
    - on disconnect: the list goes to every remaining connection, unless
      ``broadcast_on_leave`` is unset.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from src.config.settings import get_settings
from src.relay import events
from src.relay.notifier import BroadcastNotifier
from src.relay.registry import PresenceRegistry
from src.relay.router import RelayRouter
from src.relay.transport import ConnectionTable, Transport

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    CONNECTED = "connected"
    IDENTIFIED = "identified"
    DISCONNECTED = "disconnected"


@dataclass
class Session:
    connection_id: str
    state: ConnectionState = ConnectionState.CONNECTED
    user_id: str | None = None


class ConnectionManager:
    def __init__(self, broadcast_on_connect: bool = False, broadcast_on_leave: bool = True) -> None:
        self.registry = PresenceRegistry()
        self.connections = ConnectionTable()
        self.router = RelayRouter(self.registry, self.connections)
        self.notifier = BroadcastNotifier(self.registry, self.connections)
        self.broadcast_on_connect = broadcast_on_connect
        self.broadcast_on_leave = broadcast_on_leave
        self._sessions: dict[str, Session] = {}

    def session(self, connection_id: str) -> Session | None:
        return self._sessions.get(connection_id)

    async def connect(self, transport: Transport) -> str:
        """Track an accepted transport and return its new connection id."""
        connection_id = uuid.uuid4().hex
        self.connections.add(connection_id, transport)
        self._sessions[connection_id] = Session(connection_id)
        logger.info("Connection %s opened (%d live)", connection_id, len(self.connections))

        if self.broadcast_on_connect:
            await self.notifier.broadcast()
        else:
            await self.notifier.send_snapshot(connection_id)
        return connection_id

    async def identify(self, connection_id: str, user_id: str) -> None:
        session = self._sessions.get(connection_id)
        if session is None or session.state is ConnectionState.DISCONNECTED:
            return

        self.registry.register(user_id, connection_id)
        session.state = ConnectionState.IDENTIFIED
        session.user_id = user_id
        logger.info("User %s online on connection %s", user_id, connection_id)
        await self.notifier.broadcast()

    async def disconnect(self, connection_id: str) -> None:
        session = self._sessions.pop(connection_id, None)
        self.connections.remove(connection_id)
        if session is None:
            return

        session.state = ConnectionState.DISCONNECTED
        removed = self.registry.unregister(connection_id)
        logger.info("Connection %s closed, offline: %s", connection_id, ", ".join(removed) or "-")
        if self.broadcast_on_leave:
            await self.notifier.broadcast()

    async def relay(self, sender_id: str, recipient_id: str, payload: Any) -> bool:
        return await self.router.relay(sender_id, recipient_id, payload)

    async def handle(self, connection_id: str, raw: Any) -> None:
        """Dispatch one decoded JSON frame received on `connection_id`."""
        try:
            frame = events.InboundFrame.model_validate(raw)
        except ValidationError:
            await self.reply_error(connection_id, "invalid_frame", "Expected {\"event\": ..., \"data\": ...}")
            return

        if frame.event == events.ADD_USER:
            if not isinstance(frame.data, str) or not frame.data:
                await self.reply_error(connection_id, "invalid_frame", "add-user expects a user id string")
                return
            await self.identify(connection_id, frame.data)

        elif frame.event == events.MSG_SEND:
            try:
                msg = events.RelayMessage.model_validate(frame.data)
            except ValidationError:
                await self.reply_error(connection_id, "invalid_frame", "msg-send expects {to, from, message}")
                return
            await self.relay(msg.sender, msg.recipient, msg.message)

        else:
            logger.debug("Unknown event %r on connection %s", frame.event, connection_id)
            await self.reply_error(connection_id, "unknown_event", f"Unknown event: {frame.event}")

    async def reply_error(self, connection_id: str, error_type: str, message: str) -> None:
        transport = self.connections.get(connection_id)
        if transport is None:
            return
        try:
            await transport.send_json(events.error(error_type, message))
        except Exception:
            logger.warning("Error frame send failed on connection %s", connection_id, exc_info=True)


@lru_cache()
def get_connection_manager() -> ConnectionManager:
    settings = get_settings()
    return ConnectionManager(
        broadcast_on_connect=settings.RELAY_BROADCAST_ON_CONNECT,
        broadcast_on_leave=settings.RELAY_BROADCAST_ON_LEAVE,
    )
