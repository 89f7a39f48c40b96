"""Message persistence rules.

The store is independent of the socket relay: appending a message here does
not push it to the recipient, and relaying a message does not store it.
Clients that want both call both.
"""

import logging

from fastapi import HTTPException

from src.messages import repository

logger = logging.getLogger(__name__)


def _check_pair(user_a: str, user_b: str) -> None:
    if user_a == user_b:
        raise HTTPException(status_code=400, detail="A conversation needs two distinct participants")


def append_message(caller_id: str, sender_id: str, recipient_id: str, text: str) -> dict:
    if caller_id != sender_id:
        raise HTTPException(status_code=403, detail="You can only send messages as yourself")
    _check_pair(sender_id, recipient_id)

    stored = repository.append(sender_id, recipient_id, text)
    if not stored:
        raise HTTPException(status_code=400, detail="Failed to add message")
    logger.debug("Stored message %s from %s to %s", stored["id"], sender_id, recipient_id)
    return stored


def history_between(caller_id: str, user_a: str, user_b: str) -> list[dict]:
    """Return `{"fromSelf", "message"}` items ordered by update time, from user_a's point of view."""
    if caller_id not in (user_a, user_b):
        raise HTTPException(status_code=403, detail="You are not a participant of this conversation")
    _check_pair(user_a, user_b)

    messages = repository.list_between(user_a, user_b)
    return [{"fromSelf": str(msg["sender"]) == user_a, "message": msg} for msg in messages]
