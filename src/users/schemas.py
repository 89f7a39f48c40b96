"""Pydantic schemas for user profile and contact requests and responses."""

from pydantic import BaseModel, Field


# --- Requests ---

class SetAvatarRequest(BaseModel):
    avatar_path: str = Field(min_length=1, max_length=2048)


# --- Responses ---

class PublicUser(BaseModel):
    id: str
    user_name: str
    email: str
    is_avatar_set: bool = False
    avatar_path: str = ""


class Profile(PublicUser):
    contacts: list[str] = Field(default_factory=list)


class Contact(BaseModel):
    id: str
    user_name: str
    email: str
    avatar_path: str = ""


class UserResponse(BaseModel):
    status: str = "success"
    data: Profile


class UserListResponse(BaseModel):
    status: str = "success"
    data: list[PublicUser]


class ContactListResponse(BaseModel):
    status: str = "success"
    data: list[Contact]
