"""Application service: Update User use case.

Only ``name`` and ``email`` may change here; passwords are out of reach
of the CRUD surface.
"""

from __future__ import annotations

from typing import Any

from billing.domain.exceptions import DuplicateError, EntityNotFoundError
from billing.domain.model.user import User
from billing.domain.repository.user_repository import UserRepository


class UpdateUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(
        self,
        user_id: int,
        name: Any = None,
        email: Any = None,
    ) -> dict[str, Any]:
        current = await self._user_repo.find_by_id(user_id)
        if current is None:
            raise EntityNotFoundError(f"User #{user_id} not found")

        normalized = None
        if email:
            normalized = User.normalize_email(email)
            owner = await self._user_repo.find_by_email(normalized)
            if owner is not None and owner.id != user_id:
                raise DuplicateError("Email already in use by another user")

        candidate = current.with_changes(name=name, email=normalized)
        updated = await self._user_repo.update(
            user_id, {"name": candidate.name, "email": candidate.email}
        )
        if updated is None:
            raise EntityNotFoundError(f"User #{user_id} not found")
        return updated.public_view()
