"""
In-memory stand-ins for the Postgres repositories.

`store` patches the functions the services call, so service and HTTP tests
run without a database.
"""

from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from auth import security
from posts import repository as posts_repository


class FakeStore:
    def __init__(self) -> None:
        self.users: dict[int, dict] = {}
        self.posts: dict[int, dict] = {}
        self.user_batches: list[list[int]] = []
        self.fail_with: Exception | None = None
        self._next_user_id = 1
        self._next_post_id = 1
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _check_failure(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def add_user(self, first_name: str, last_name: str, *, email: str | None = None, password_hash: str = "") -> dict:
        user_id = self._next_user_id
        self._next_user_id += 1
        now = self._now()
        self.users[user_id] = {
            "id": user_id,
            "email": email or f"user{user_id}@example.com",
            "password_hash": password_hash,
            "first_name": first_name,
            "last_name": last_name,
            "is_active": True,
            "created_at": now,
            "updated_at": now,
        }
        return copy.deepcopy(self.users[user_id])

    def add_post(self, *, creator_id: int, title: str = "t", text: str = "body") -> dict:
        user = self.users[creator_id]
        post_id = self._next_post_id
        self._next_post_id += 1
        now = self._now()
        self.posts[post_id] = {
            "id": post_id,
            "title": title,
            "text": text,
            "creator_name": f"{user['first_name']} {user['last_name']}",
            "creator_id": creator_id,
            "created_at": now,
            "updated_at": now,
        }
        return copy.deepcopy(self.posts[post_id])

    # posts.repository

    async def list_posts(self, *, limit: int, before: datetime | None = None) -> list[dict]:
        rows = sorted(self.posts.values(), key=lambda p: p["created_at"], reverse=True)
        if before is not None:
            rows = [p for p in rows if p["created_at"] < before]
        return copy.deepcopy(rows[:limit])

    async def get_post(self, post_id: int) -> dict | None:
        row = self.posts.get(post_id)
        return copy.deepcopy(row) if row is not None else None

    async def insert_post(self, *, title: str, text: str, creator_id: int, creator_name: str) -> dict:
        self._check_failure()
        if creator_id not in self.users:
            raise RuntimeError('insert or update on table "post" violates foreign key constraint')
        post_id = self._next_post_id
        self._next_post_id += 1
        now = self._now()
        self.posts[post_id] = {
            "id": post_id,
            "title": title,
            "text": text,
            "creator_name": creator_name,
            "creator_id": creator_id,
            "created_at": now,
            "updated_at": now,
        }
        return copy.deepcopy(self.posts[post_id])

    async def update_owned_post(self, post_id: int, *, creator_id: int, title: str, text: str) -> dict | None:
        self._check_failure()
        row = self.posts.get(post_id)
        if row is None or row["creator_id"] != creator_id:
            return None
        row.update(title=title, text=text, updated_at=self._now())
        return copy.deepcopy(row)

    async def delete_owned_post(self, post_id: int, *, creator_id: int) -> int:
        self._check_failure()
        row = self.posts.get(post_id)
        if row is None or row["creator_id"] != creator_id:
            return 0
        del self.posts[post_id]
        return 1

    # auth.repository

    async def get_user_by_id(self, user_id: int) -> dict | None:
        self._check_failure()
        row = self.users.get(user_id)
        return copy.deepcopy(row) if row is not None else None

    async def get_users_by_ids(self, user_ids: list[int]) -> list[dict]:
        self._check_failure()
        self.user_batches.append(list(user_ids))
        return [copy.deepcopy(self.users[i]) for i in user_ids if i in self.users]

    async def get_user_by_email(self, email: str) -> dict | None:
        wanted = auth_repository.normalize_email(email)
        for row in self.users.values():
            if row["email"] == wanted:
                return copy.deepcopy(row)
        return None

    async def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        is_active: bool = True,
    ) -> dict:
        return self.add_user(
            first_name,
            last_name,
            email=auth_repository.normalize_email(email),
            password_hash=password_hash,
        )


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()
    for name in ("list_posts", "get_post", "insert_post", "update_owned_post", "delete_owned_post"):
        monkeypatch.setattr(posts_repository, name, getattr(fake, name))
    for name in ("get_user_by_id", "get_users_by_ids", "get_user_by_email", "create_user"):
        monkeypatch.setattr(auth_repository, name, getattr(fake, name))
    return fake


@pytest.fixture
def client(store: FakeStore) -> TestClient:
    # Not used as a context manager, so the lifespan (DB pool) never runs.
    from main import app

    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {security.build_access_token(user_id=user_id)}"}

    return _headers
