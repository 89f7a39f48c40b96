"""Relay socket event names, inbound frame schemas and outbound frame builders.

Every frame on the socket is a JSON object `{"event": <name>, "data": <value>}`.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Client -> server
ADD_USER = "add-user"
MSG_SEND = "msg-send"

# Server -> client
ONLINE_USERS = "online-users"
MSG_RECEIVE = "msg-receive"
ERROR = "error"


class InboundFrame(BaseModel):
    event: str
    data: Any = None


class RelayMessage(BaseModel):
    """A point-to-point message for one relay hop. `message` is opaque."""

    model_config = ConfigDict(populate_by_name=True)

    recipient: str = Field(alias="to", min_length=1)
    sender: str = Field(alias="from", min_length=1)
    message: Any


def _frame(event: str, data: Any) -> dict:
    return {"event": event, "data": data}


def online_users(user_ids: list[str]) -> dict:
    return _frame(ONLINE_USERS, user_ids)


def msg_receive(payload: Any) -> dict:
    return _frame(MSG_RECEIVE, payload)


def error(error_type: str, message: str) -> dict:
    return _frame(ERROR, {"type": error_type, "message": message})
