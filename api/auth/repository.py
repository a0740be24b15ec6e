"""
User persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db

USER_COLUMNS = "id, email, first_name, last_name, is_active, created_at, updated_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(
    *,
    email: str,
    password_hash: str,
    first_name: str,
    last_name: str,
    is_active: bool = True,
) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (email, password_hash, first_name, last_name, is_active)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING {USER_COLUMNS}
        """,
        normalize_email(email),
        password_hash,
        first_name.strip(),
        last_name.strip(),
        is_active,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}, password_hash
        FROM users
        WHERE lower(email) = lower($1)
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def get_users_by_ids(user_ids: list[int]) -> list[dict[str, Any]]:
    """
    One round trip for a whole batch; order of the result is unspecified.
    """
    if not user_ids:
        return []
    return await db.fetch_all(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE id = ANY($1::int[])
        """,
        list(user_ids),
    )
