"""Application service: Register User use case.

The only way a User comes into existence.  The email check here is a
courtesy; a store with a unique constraint remains the authority and
reports a collision as DuplicateError itself.
"""

from __future__ import annotations

from typing import Any

from billing.application.dto import AuthResult
from billing.application.ports import PasswordHasher, TokenIssuer
from billing.domain.exceptions import DuplicateError, ValidationError
from billing.domain.model.user import User
from billing.domain.repository.user_repository import UserRepository


class RegisterUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._user_repo = user_repo
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def handle(self, name: Any, email: Any, password: Any) -> AuthResult:
        if not name or not email or not password:
            raise ValidationError("name, email and password are required")

        normalized = User.normalize_email(email)
        if await self._user_repo.find_by_email(normalized) is not None:
            raise DuplicateError("Email already registered")

        password_hash = self._password_hasher.hash(password)
        user = User.create(name=name, email=normalized, password_hash=password_hash)
        created = await self._user_repo.create(user)

        token = self._token_issuer.issue({"id": created.id, "email": created.email})
        return AuthResult(user=created.public_view(), token=token)
