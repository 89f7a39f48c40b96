"""Business logic for profiles, avatars and contact lists."""

import logging

from fastapi import HTTPException

from src.users import repository

logger = logging.getLogger(__name__)


def get_user_or_404(user_id: str) -> dict:
    user = repository.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def set_avatar(user_id: str, avatar_path: str) -> dict:
    get_user_or_404(user_id)
    return repository.update(user_id, {"is_avatar_set": True, "avatar_path": avatar_path})


def search_users(fragment: str) -> list[dict]:
    fragment = fragment.strip()
    if not fragment:
        return []
    return repository.search_by_name(fragment)


def add_contact(user_id: str, contact_id: str) -> dict:
    if user_id == contact_id:
        raise HTTPException(status_code=400, detail="Cannot add yourself as a contact")

    user = get_user_or_404(user_id)
    if not repository.get_by_id(contact_id):
        raise HTTPException(status_code=404, detail="Contact not found")

    contacts = list(user.get("contacts") or [])
    if contact_id in contacts:
        raise HTTPException(status_code=400, detail="User already in contact list")

    contacts.append(contact_id)
    logger.info("User %s added contact %s", user_id, contact_id)
    return repository.update(user_id, {"contacts": contacts})


def list_contacts(user_id: str) -> list[dict]:
    user = get_user_or_404(user_id)
    return repository.list_by_ids(list(user.get("contacts") or []))
