"""
Post business logic.

Reads:
- keyset-paginated listing (newest first, cursor = created_at in ms)
- single fetch (absence is a normal result)

Writes are ownership-scoped in SQL and never let store errors escape;
failures come back as `errors` on the result object.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import HTTPException, status
from strawberry.dataloader import DataLoader

from auth import repository as auth_repository
from core.errors import standard_error

from . import repository, schemas

MAX_PAGE_SIZE = 50
SNIPPET_LENGTH = 50

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

logger = logging.getLogger(__name__)


def text_snippet(text: str) -> str:
    return (text or "")[:SNIPPET_LENGTH]


def effective_limit(limit: int) -> int:
    # Non-positive requests still get a one-item page.
    return max(1, min(MAX_PAGE_SIZE, int(limit)))


def decode_cursor(cursor: str | None) -> datetime | None:
    raw = (cursor or "").strip()
    if not raw:
        return None
    try:
        return _EPOCH + timedelta(milliseconds=int(raw))
    except (ValueError, OverflowError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid cursor.") from exc


def encode_cursor(created_at: datetime) -> str:
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return str((created_at - _EPOCH) // timedelta(milliseconds=1))


def creator_display_name(user_row: dict) -> str:
    return f"{user_row['first_name']} {user_row['last_name']}"


async def resolve_creator(post_row: dict, loader: DataLoader) -> dict[str, Any] | None:
    return await loader.load(int(post_row["creator_id"]))


def to_post(row: dict, creator: dict | None = None) -> schemas.Post:
    return schemas.Post(
        id=int(row["id"]),
        title=str(row["title"]),
        text=str(row["text"]),
        text_snippet=text_snippet(str(row["text"])),
        creator_id=int(row["creator_id"]),
        creator_name=str(row["creator_name"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        creator=(
            schemas.Creator(
                id=int(creator["id"]),
                first_name=str(creator["first_name"]),
                last_name=str(creator["last_name"]),
            )
            if creator is not None
            else None
        ),
    )


async def _with_creators(rows: list[dict], loader: DataLoader) -> list[schemas.Post]:
    creators = await asyncio.gather(*(resolve_creator(row, loader) for row in rows))
    return [to_post(row, creator) for row, creator in zip(rows, creators)]


async def list_posts(*, limit: int, cursor: str | None, loader: DataLoader) -> schemas.PaginatedPosts:
    page_size = effective_limit(limit)
    before = decode_cursor(cursor)

    # One extra row tells us whether another page exists.
    rows = await repository.list_posts(limit=page_size + 1, before=before)
    has_more = len(rows) == page_size + 1
    rows = rows[:page_size]

    posts = await _with_creators(rows, loader)
    next_cursor = encode_cursor(rows[-1]["created_at"]) if has_more and rows else None
    return schemas.PaginatedPosts(posts=posts, has_more=has_more, next_cursor=next_cursor)


async def get_post(post_id: int, *, loader: DataLoader) -> schemas.PostLookup:
    row = await repository.get_post(post_id)
    if row is None:
        return schemas.PostLookup(post=None)
    return schemas.PostLookup(post=(await _with_creators([row], loader))[0])


async def create_post(payload: schemas.PostInput, *, user_id: int) -> schemas.PostResponse:
    try:
        user = await auth_repository.get_user_by_id(user_id)
        if user is None:
            logger.warning("post_create_rejected user_id=%s reason=user_not_found", user_id)
            return schemas.PostResponse(errors=standard_error())

        row = await repository.insert_post(
            title=payload.title,
            text=payload.text,
            creator_id=int(user["id"]),
            creator_name=creator_display_name(user),
        )
    except Exception as exc:
        logger.exception("post_create_failed user_id=%s", user_id)
        return schemas.PostResponse(errors=standard_error(exc))

    logger.info("post_created post_id=%s creator_id=%s", row["id"], row["creator_id"])
    return schemas.PostResponse(post=to_post(row, user))


async def _missing_outcome(post_id: int) -> schemas.WriteOutcome:
    """
    Tell apart the two ways an ownership-scoped write can match zero rows.
    """
    existing = await repository.get_post(post_id)
    if existing is None:
        return schemas.WriteOutcome.NOT_FOUND
    return schemas.WriteOutcome.FORBIDDEN


async def update_post(
    post_id: int,
    payload: schemas.PostInput,
    *,
    user_id: int,
    loader: DataLoader,
) -> schemas.UpdateResult:
    try:
        row = await repository.update_owned_post(
            post_id,
            creator_id=user_id,
            title=payload.title,
            text=payload.text,
        )
        if row is None:
            outcome = await _missing_outcome(post_id)
            logger.info("post_update_skipped post_id=%s user_id=%s outcome=%s", post_id, user_id, outcome.value)
            return schemas.UpdateResult(outcome=outcome)
        post = (await _with_creators([row], loader))[0]
    except Exception as exc:
        logger.exception("post_update_failed post_id=%s user_id=%s", post_id, user_id)
        return schemas.UpdateResult(errors=standard_error(exc))

    return schemas.UpdateResult(outcome=schemas.WriteOutcome.UPDATED, post=post)


async def delete_post(post_id: int, *, user_id: int) -> schemas.DeleteResult:
    try:
        deleted = await repository.delete_owned_post(post_id, creator_id=user_id)
        if deleted:
            logger.info("post_deleted post_id=%s user_id=%s", post_id, user_id)
            return schemas.DeleteResult(outcome=schemas.WriteOutcome.DELETED)
        outcome = await _missing_outcome(post_id)
    except Exception as exc:
        logger.exception("post_delete_failed post_id=%s user_id=%s", post_id, user_id)
        return schemas.DeleteResult(ok=False, errors=standard_error(exc))

    return schemas.DeleteResult(outcome=outcome)
