"""Persisted message endpoints: append and history."""

from fastapi import APIRouter, Depends, Query

from src.auth.dependencies import CurrentUser, get_current_user
from src.messages.schemas import HistoryResponse, SendMessageRequest, StoredMessageResponse
from src.messages.service import append_message, history_between

router = APIRouter(prefix="/api/v1/messages", tags=["Messages"])


@router.post("", status_code=201, response_model=StoredMessageResponse, summary="Store a message", description="Persist a direct message. Does not deliver it over the relay.")
async def append(body: SendMessageRequest, user: CurrentUser = Depends(get_current_user)):
    stored = append_message(user.id, body.sender, body.recipient, body.message)
    return StoredMessageResponse(data=stored)


@router.get("", response_model=HistoryResponse, response_model_by_alias=True, summary="Conversation history", description="All messages between two users, oldest first. `fromSelf` is relative to `from`.")
async def history(
    from_: str = Query(..., alias="from", min_length=1),
    to: str = Query(..., min_length=1),
    user: CurrentUser = Depends(get_current_user),
):
    return HistoryResponse(data=history_between(user.id, from_, to))
