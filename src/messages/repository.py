"""Data access layer for persisted direct messages."""

from src.db.client import get_supabase
from src.db.models import MESSAGES


def append(sender_id: str, recipient_id: str, text: str) -> dict:
    db = get_supabase()
    row = {
        "text": text,
        "users": [sender_id, recipient_id],
        "sender": sender_id,
    }
    result = db.table(MESSAGES).insert(row).execute()
    return result.data[0]


def list_between(user_a: str, user_b: str) -> list[dict]:
    """Messages whose participant set contains both users, oldest update first."""
    db = get_supabase()
    result = (
        db.table(MESSAGES)
        .select("*")
        .contains("users", [user_a, user_b])
        .order("updated_at")
        .execute()
    )
    return result.data
