from __future__ import annotations

import jwt
import pytest
from fastapi import HTTPException

from auth import dependencies, security


def test_access_token_carries_user_id():
    token = security.build_access_token(user_id=7)
    assert security.user_id_from_access_token(token) == 7


def test_token_signed_with_other_secret_is_rejected(monkeypatch):
    token = security.build_access_token(user_id=7)
    monkeypatch.setenv("JWT_SECRET", "rotated")

    with pytest.raises(security.AuthSecurityError):
        security.user_id_from_access_token(token)


def test_non_access_token_is_rejected():
    token = jwt.encode({"sub": "7", "type": "refresh"}, security.jwt_secret(), algorithm="HS256")

    with pytest.raises(security.AuthSecurityError):
        security.decode_access_token(token)


@pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer   "])
def test_bad_authorization_headers(header):
    with pytest.raises(HTTPException) as exc_info:
        dependencies._extract_bearer_token(header)
    assert exc_info.value.status_code == 401


def test_password_hashing():
    hashed = security.hash_password("correct horse")
    assert security.verify_password("correct horse", hashed)
    assert not security.verify_password("wrong horse", hashed)
    assert not security.verify_password("correct horse", "not-a-hash")


def test_register_login_me(client, store):
    registered = client.post(
        "/auth/register",
        json={"email": "Ada@Example.com", "password": "analytical", "first_name": "Ada", "last_name": "Lovelace"},
    )
    assert registered.status_code == 200
    assert registered.json()["user"]["email"] == "ada@example.com"

    duplicate = client.post(
        "/auth/register",
        json={"email": "ada@example.com", "password": "analytical", "first_name": "A", "last_name": "L"},
    )
    assert duplicate.status_code == 409

    bad_login = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope"})
    assert bad_login.status_code == 401

    login = client.post("/auth/login", json={"email": "ada@example.com", "password": "analytical"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["first_name"] == "Ada"


def test_me_rejects_token_for_deleted_user(client, store, auth_headers):
    user = store.add_user("Ada", "Lovelace")
    del store.users[user["id"]]

    resp = client.get("/auth/me", headers=auth_headers(user["id"]))

    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not found."


def test_me_rejects_inactive_user(client, store, auth_headers):
    user = store.add_user("Ada", "Lovelace")
    store.users[user["id"]]["is_active"] = False

    assert client.get("/auth/me", headers=auth_headers(user["id"])).status_code == 403
