"""Data access layer for users and their contact lists."""

from typing import Any

from src.db.client import get_supabase
from src.db.models import CONTACT_COLUMNS, PUBLIC_USER_COLUMNS, USERS


def create(user_name: str, email: str, password_hash: str) -> dict:
    db = get_supabase()
    row = {
        "user_name": user_name,
        "email": email,
        "password_hash": password_hash,
        "is_avatar_set": False,
        "avatar_path": "",
        "contacts": [],
    }
    result = db.table(USERS).insert(row).execute()
    return result.data[0]


def get_by_email(email: str) -> dict | None:
    db = get_supabase()
    result = db.table(USERS).select("*").eq("email", email).execute()
    return result.data[0] if result.data else None


def get_by_id(user_id: str) -> dict | None:
    db = get_supabase()
    result = db.table(USERS).select("*").eq("id", user_id).execute()
    return result.data[0] if result.data else None


def update(user_id: str, data: dict[str, Any]) -> dict | None:
    db = get_supabase()
    result = db.table(USERS).update(data).eq("id", user_id).execute()
    return result.data[0] if result.data else None


def search_by_name(fragment: str, limit: int = 20) -> list[dict]:
    db = get_supabase()
    # Escape LIKE wildcards so the fragment is matched literally
    escaped = fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    result = (
        db.table(USERS)
        .select(PUBLIC_USER_COLUMNS)
        .ilike("user_name", f"%{escaped}%")
        .order("user_name")
        .limit(limit)
        .execute()
    )
    return result.data


def list_by_ids(user_ids: list[str]) -> list[dict]:
    if not user_ids:
        return []
    db = get_supabase()
    result = db.table(USERS).select(CONTACT_COLUMNS).in_("id", user_ids).execute()
    by_id = {row["id"]: row for row in result.data}
    return [by_id[uid] for uid in user_ids if uid in by_id]
