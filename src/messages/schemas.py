"""Pydantic schemas for message requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(alias="from", min_length=1)
    recipient: str = Field(alias="to", min_length=1)
    message: str = Field(min_length=1)


class MessageResponse(BaseModel):
    id: str
    text: str
    users: list[str]
    sender: str
    created_at: str
    updated_at: str


class HistoryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_self: bool = Field(alias="fromSelf")
    message: MessageResponse


class StoredMessageResponse(BaseModel):
    status: str = "success"
    data: MessageResponse


class HistoryResponse(BaseModel):
    status: str = "success"
    data: list[HistoryItem]
