"""Outbound collaborators the auth use cases depend on.

Password hashing and token signing are treated as opaque functions;
concrete implementations live in ``billing.infrastructure.security``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        """Return a self-describing hash (algorithm, cost and salt embedded)."""

    @abstractmethod
    def compare(self, plaintext: str, hashed: str) -> bool:
        """Constant-time check of *plaintext* against *hashed*."""


class TokenIssuer(ABC):

    @abstractmethod
    def issue(self, payload: Mapping[str, Any]) -> str:
        """Sign *payload* into a token that carries its own expiry."""

    @abstractmethod
    def verify(self, token: str) -> dict[str, Any]:
        """Return the payload of a valid token or raise AuthenticationError."""
