"""Tests for avatar, search and contact endpoints."""

import uuid

from conftest import bearer, register_user


def test_set_avatar(client, auth_tokens, auth_header):
    user_id = auth_tokens["user"]["id"]
    resp = client.put(f"/api/v1/users/{user_id}/avatar", json={"avatar_path": "avatars/cat.svg"}, headers=auth_header)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["is_avatar_set"] is True
    assert data["avatar_path"] == "avatars/cat.svg"


def test_set_avatar_for_someone_else(client, auth_header, other_user):
    resp = client.put(f"/api/v1/users/{other_user['user']['id']}/avatar", json={"avatar_path": "x.svg"}, headers=auth_header)
    assert resp.status_code == 403


def test_set_avatar_requires_auth(client, auth_tokens):
    resp = client.put(f"/api/v1/users/{auth_tokens['user']['id']}/avatar", json={"avatar_path": "x.svg"})
    assert resp.status_code == 401


def test_search_is_case_insensitive_substring(client, auth_header):
    tag = uuid.uuid4().hex[:6]
    register_user(client, user_name=f"Alice{tag}")
    register_user(client, user_name=f"malice{tag}")
    register_user(client, user_name=f"bob{tag}")

    resp = client.get(f"/api/v1/users/search/ALICE{tag}", headers=auth_header)
    assert resp.status_code == 200
    names = {u["user_name"] for u in resp.json()["data"]}
    assert names == {f"Alice{tag}", f"malice{tag}"}
    assert all("password_hash" not in u for u in resp.json()["data"])


def test_search_treats_wildcards_literally(client, auth_header):
    resp = client.get("/api/v1/users/search/%25", headers=auth_header)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_add_and_list_contacts(client):
    me = register_user(client)
    first = register_user(client, user_name="first_contact")
    second = register_user(client, user_name="second_contact")
    my_id = me["user"]["id"]

    for contact in (second, first):
        resp = client.post(f"/api/v1/users/{my_id}/contacts/{contact['user']['id']}", headers=bearer(me))
        assert resp.status_code == 200

    assert resp.json()["data"]["contacts"] == [second["user"]["id"], first["user"]["id"]]

    resp = client.get(f"/api/v1/users/{my_id}/contacts", headers=bearer(me))
    assert resp.status_code == 200
    contacts = resp.json()["data"]
    assert [c["user_name"] for c in contacts] == ["second_contact", "first_contact"]
    assert all("password_hash" not in c and "contacts" not in c for c in contacts)


def test_add_contact_twice(client):
    me = register_user(client)
    friend = register_user(client)
    url = f"/api/v1/users/{me['user']['id']}/contacts/{friend['user']['id']}"

    assert client.post(url, headers=bearer(me)).status_code == 200
    resp = client.post(url, headers=bearer(me))
    assert resp.status_code == 400


def test_add_self_as_contact(client):
    me = register_user(client)
    resp = client.post(f"/api/v1/users/{me['user']['id']}/contacts/{me['user']['id']}", headers=bearer(me))
    assert resp.status_code == 400


def test_add_unknown_contact(client):
    me = register_user(client)
    resp = client.post(f"/api/v1/users/{me['user']['id']}/contacts/{uuid.uuid4()}", headers=bearer(me))
    assert resp.status_code == 404
    assert resp.json()["error"]["type"] == "not_found"


def test_list_contacts_of_someone_else(client, auth_header, other_user):
    resp = client.get(f"/api/v1/users/{other_user['user']['id']}/contacts", headers=auth_header)
    assert resp.status_code == 403
