"""bcrypt-backed password hashing."""

from __future__ import annotations

import bcrypt

from billing.application.ports import PasswordHasher
from billing.domain.exceptions import ValidationError


class BcryptPasswordHasher(PasswordHasher):

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        if not isinstance(plaintext, str) or not plaintext:
            raise ValidationError("Password must be a non-empty string")
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(self._rounds)).decode()

    def compare(self, plaintext: str, hashed: str) -> bool:
        if not isinstance(plaintext, str) or not isinstance(hashed, str):
            return False
        try:
            return bcrypt.checkpw(plaintext.encode(), hashed.encode())
        except ValueError:
            # malformed hash
            return False
