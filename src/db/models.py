"""Database table name constants and column projections."""

# Table names — single source of truth for Supabase queries
USERS = "users"
MESSAGES = "messages"
REFRESH_TOKENS = "refresh_tokens"

# Columns safe to return to other users (never password_hash)
PUBLIC_USER_COLUMNS = "id, user_name, email, is_avatar_set, avatar_path"
CONTACT_COLUMNS = "id, user_name, email, avatar_path"
