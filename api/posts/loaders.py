"""
Request-scoped batching loader for post creators.

All `load(user_id)` calls issued in the same event-loop tick are coalesced
into one `get_users_by_ids` query. The loader caches by id, so a fresh one
must be built for every request (see `get_user_loader`).
"""

from __future__ import annotations

from typing import Any

from strawberry.dataloader import DataLoader

from auth import repository as auth_repository


async def batch_load_users(user_ids: list[int]) -> list[dict[str, Any] | None]:
    rows = await auth_repository.get_users_by_ids(list(user_ids))
    by_id = {int(row["id"]): row for row in rows}
    return [by_id.get(int(user_id)) for user_id in user_ids]


def create_user_loader() -> DataLoader:
    return DataLoader(load_fn=batch_load_users)


async def get_user_loader() -> DataLoader:
    """
    FastAPI dependency: one loader per request, dropped with the request.
    """
    return create_user_loader()
