"""
Post API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from strawberry.dataloader import DataLoader

from auth import dependencies as auth_dependencies

from . import loaders, schemas, service

router = APIRouter(prefix="/posts")

# post.id is a Postgres int4.
MAX_POST_ID = 2**31 - 1


@router.get("")
async def list_posts(
    limit: int = Query(10),
    cursor: str | None = Query(default=None, max_length=32),
    loader: DataLoader = Depends(loaders.get_user_loader),
) -> schemas.PaginatedPosts:
    """
    Newest posts first. Pass `next_cursor` back as `cursor` for the next page.
    """
    return await service.list_posts(limit=limit, cursor=cursor, loader=loader)


@router.get("/{post_id}")
async def get_post(
    post_id: int = Path(..., ge=1, le=MAX_POST_ID),
    loader: DataLoader = Depends(loaders.get_user_loader),
) -> schemas.PostLookup:
    return await service.get_post(post_id, loader=loader)


@router.post("")
async def create_post(
    payload: schemas.PostInput,
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> schemas.PostResponse:
    return await service.create_post(payload, user_id=user_id)


@router.put("/{post_id}")
async def update_post(
    payload: schemas.PostInput,
    post_id: int = Path(..., ge=1, le=MAX_POST_ID),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
    loader: DataLoader = Depends(loaders.get_user_loader),
) -> schemas.UpdateResult:
    result = await service.update_post(post_id, payload, user_id=user_id, loader=loader)
    if result.outcome == schemas.WriteOutcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")
    if result.outcome == schemas.WriteOutcome.FORBIDDEN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Post belongs to another user.")
    return result


@router.delete("/{post_id}")
async def delete_post(
    post_id: int = Path(..., ge=1, le=MAX_POST_ID),
    user_id: int = Depends(auth_dependencies.get_current_user_id),
) -> schemas.DeleteResult:
    return await service.delete_post(post_id, user_id=user_id)
