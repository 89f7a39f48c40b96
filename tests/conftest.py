"""Shared test fixtures."""

import os
import re
import uuid
from datetime import datetime, timezone

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("JWT_SECRET", "test-secret-with-enough-bytes-for-hs256")
os.environ.setdefault("RATE_LIMIT_STANDARD", "10000")
os.environ.setdefault("RATE_LIMIT_MESSAGES", "10000")

import pytest
from fastapi.testclient import TestClient

from src.db.client import get_supabase
from src.main import app
from src.relay.manager import ConnectionManager, get_connection_manager


# --- In-memory stand-in for the Supabase table API used by the repositories ---

class FakeResult:
    def __init__(self, data: list[dict]):
        self.data = data


def _like_to_regex(pattern: str) -> re.Pattern:
    out, escaped = [], False
    for ch in pattern:
        if escaped:
            out.append(re.escape(ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return re.compile("".join(out), re.IGNORECASE | re.DOTALL)


class FakeQuery:
    def __init__(self, rows: list[dict]):
        self._rows = rows
        self._action = "select"
        self._columns = "*"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None

    def select(self, columns="*"):
        self._columns = columns
        return self

    def insert(self, payload):
        self._action, self._payload = "insert", payload
        return self

    def update(self, values):
        self._action, self._payload = "update", values
        return self

    def eq(self, column, value):
        self._filters.append(lambda r: r.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda r: r.get(column) in values)
        return self

    def contains(self, column, values):
        self._filters.append(lambda r: all(v in (r.get(column) or []) for v in values))
        return self

    def ilike(self, column, pattern):
        regex = _like_to_regex(pattern)
        self._filters.append(lambda r: regex.fullmatch(str(r.get(column, ""))) is not None)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, size):
        self._limit = size
        return self

    def _matching(self) -> list[dict]:
        return [r for r in self._rows if all(f(r) for f in self._filters)]

    def _project(self, row: dict) -> dict:
        if self._columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self._columns.split(",")}

    def execute(self) -> FakeResult:
        now = datetime.now(timezone.utc).isoformat()

        if self._action == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in payload:
                row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **item}
                self._rows.append(row)
                inserted.append(dict(row))
            return FakeResult(inserted)

        matched = self._matching()

        if self._action == "update":
            for row in matched:
                row.update(self._payload)
                row["updated_at"] = now
            return FakeResult([dict(r) for r in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResult([self._project(r) for r in matched])


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, []))


@pytest.fixture(scope="session", autouse=True)
def fake_db():
    db = FakeSupabase()
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("src.db.client.create_client", lambda url, key: db)
        get_supabase.cache_clear()
        yield db
    get_supabase.cache_clear()


# --- HTTP fixtures ---

@pytest.fixture(scope="module")
def client():
    return TestClient(app)


@pytest.fixture(scope="module")
def test_email():
    return f"test_{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture(scope="module")
def test_password():
    return "SecureTestPass123"


def register_user(client, email=None, password="SecureTestPass123", user_name=None) -> dict:
    email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
    user_name = user_name or email.split("@")[0]
    resp = client.post("/api/v1/auth/register", json={"user_name": user_name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def bearer(auth: dict) -> dict:
    return {"Authorization": f"Bearer {auth['access_token']}"}


@pytest.fixture(scope="module")
def auth_tokens(client, test_email, test_password):
    """Register a user and return tokens plus the user."""
    return register_user(client, test_email, test_password)


@pytest.fixture(scope="module")
def auth_header(auth_tokens):
    return bearer(auth_tokens)


@pytest.fixture(scope="module")
def other_user(client):
    return register_user(client)


# --- Relay fixtures ---

@pytest.fixture
def relay_manager():
    manager = ConnectionManager()
    app.dependency_overrides[get_connection_manager] = lambda: manager
    yield manager
    app.dependency_overrides.pop(get_connection_manager, None)


@pytest.fixture
def relay_client(relay_manager):
    # One portal for every socket, so all sessions share the app's event loop
    with TestClient(app) as c:
        yield c


class FakeTransport:
    def __init__(self):
        self.sent: list = []

    async def send_json(self, data):
        self.sent.append(data)

    def events(self, name: str) -> list:
        return [f["data"] for f in self.sent if f["event"] == name]


class BrokenTransport:
    async def send_json(self, data):
        raise RuntimeError("socket closed")
