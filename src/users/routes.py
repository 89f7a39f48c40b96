"""User profile, avatar, search and contact endpoints."""

from fastapi import APIRouter, Depends

from src.auth.dependencies import CurrentUser, get_current_user, require_self
from src.users.schemas import ContactListResponse, SetAvatarRequest, UserListResponse, UserResponse
from src.users.service import add_contact, list_contacts, search_users, set_avatar

router = APIRouter(prefix="/api/v1/users", tags=["Users"])


@router.put("/{user_id}/avatar", response_model=UserResponse, summary="Set avatar", description="Select an avatar image for the authenticated user.")
async def update_avatar(user_id: str, body: SetAvatarRequest, user: CurrentUser = Depends(get_current_user)):
    require_self(user, user_id)
    return UserResponse(data=set_avatar(user_id, body.avatar_path))


@router.get("/search/{user_name}", response_model=UserListResponse, summary="Search users", description="Case-insensitive substring search on user names.")
async def search(user_name: str, user: CurrentUser = Depends(get_current_user)):
    return UserListResponse(data=search_users(user_name))


@router.post("/{user_id}/contacts/{contact_id}", response_model=UserResponse, summary="Add a contact")
async def create_contact(user_id: str, contact_id: str, user: CurrentUser = Depends(get_current_user)):
    require_self(user, user_id)
    return UserResponse(data=add_contact(user_id, contact_id))


@router.get("/{user_id}/contacts", response_model=ContactListResponse, summary="List contacts", description="Public profiles of the user's contacts, in the order they were added.")
async def contacts(user_id: str, user: CurrentUser = Depends(get_current_user)):
    require_self(user, user_id)
    return ContactListResponse(data=list_contacts(user_id))
