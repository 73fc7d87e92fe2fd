"""Application service: Remove User use case."""

from __future__ import annotations

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.user_repository import UserRepository


class RemoveUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, user_id: int) -> None:
        if not await self._user_repo.delete(user_id):
            raise EntityNotFoundError(f"User #{user_id} not found")
