"""Application service: Login use case.

Unknown email and wrong password fail with the same message so callers
cannot probe which addresses are registered.
"""

from __future__ import annotations

from typing import Any

from billing.application.dto import AuthResult
from billing.application.ports import PasswordHasher, TokenIssuer
from billing.domain.exceptions import AuthenticationError
from billing.domain.repository.user_repository import UserRepository

INVALID_CREDENTIALS = "Invalid email or password"


class LoginUserHandler:

    def __init__(
        self,
        user_repo: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._user_repo = user_repo
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def handle(self, email: Any, password: Any) -> AuthResult:
        email_str = str(email if email is not None else "").strip().lower()
        user = await self._user_repo.find_by_email(email_str) if email_str else None
        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not self._password_hasher.compare(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self._token_issuer.issue({"id": user.id, "email": user.email})
        return AuthResult(user=user.public_view(), token=token)
