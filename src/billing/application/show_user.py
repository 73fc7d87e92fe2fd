"""Application service: Show/List Users use cases (queries).

Both return public views; the password hash never leaves this layer.
"""

from __future__ import annotations

from typing import Any

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.user_repository import UserRepository


class ShowUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, user_id: int) -> dict[str, Any]:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise EntityNotFoundError(f"User #{user_id} not found")
        return user.public_view()


class ListUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self) -> list[dict[str, Any]]:
        return [user.public_view() for user in await self._user_repo.find_all()]
