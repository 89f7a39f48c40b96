"""The slice of a socket the relay needs, and the table of live sockets."""

from typing import Any, Protocol


class Transport(Protocol):
    """Anything that can push a JSON frame to one client (e.g. a Starlette WebSocket)."""

    async def send_json(self, data: Any) -> None: ...


class ConnectionTable:
    """Live transports keyed by connection id, in connect order."""

    def __init__(self) -> None:
        self._transports: dict[str, Transport] = {}

    def add(self, connection_id: str, transport: Transport) -> None:
        self._transports[connection_id] = transport

    def remove(self, connection_id: str) -> Transport | None:
        return self._transports.pop(connection_id, None)

    def get(self, connection_id: str) -> Transport | None:
        return self._transports.get(connection_id)

    def items(self) -> list[tuple[str, Transport]]:
        return list(self._transports.items())

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._transports

    def __len__(self) -> int:
        return len(self._transports)
