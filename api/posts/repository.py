"""
Post persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core import db

POST_COLUMNS = "id, title, text, creator_name, creator_id, created_at, updated_at"


async def list_posts(*, limit: int, before: datetime | None = None) -> list[dict[str, Any]]:
    """
    Newest first. With `before`, only rows created strictly earlier (keyset).
    """
    if before is None:
        return await db.fetch_all(
            f"""
            SELECT {POST_COLUMNS}
            FROM post p
            ORDER BY p.created_at DESC
            LIMIT $1
            """,
            limit,
        )
    return await db.fetch_all(
        f"""
        SELECT {POST_COLUMNS}
        FROM post p
        WHERE p.created_at < $2
        ORDER BY p.created_at DESC
        LIMIT $1
        """,
        limit,
        before,
    )


async def get_post(post_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {POST_COLUMNS}
        FROM post
        WHERE id = $1
        """,
        post_id,
    )


async def insert_post(*, title: str, text: str, creator_id: int, creator_name: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO post (title, text, creator_id, creator_name)
        VALUES ($1, $2, $3, $4)
        RETURNING {POST_COLUMNS}
        """,
        title,
        text,
        creator_id,
        creator_name,
    )
    if row is None:
        raise RuntimeError("Failed to create post.")
    return row


async def update_owned_post(post_id: int, *, creator_id: int, title: str, text: str) -> dict[str, Any] | None:
    """
    Returns None when no row matched both the id and the owner.
    """
    return await db.fetch_one(
        f"""
        UPDATE post
        SET title = $3,
            text = $4,
            updated_at = now()
        WHERE id = $1
          AND creator_id = $2
        RETURNING {POST_COLUMNS}
        """,
        post_id,
        creator_id,
        title,
        text,
    )


async def delete_owned_post(post_id: int, *, creator_id: int) -> int:
    status = await db.execute(
        """
        DELETE FROM post
        WHERE id = $1
          AND creator_id = $2
        """,
        post_id,
        creator_id,
    )
    return db.affected_rows(status)
