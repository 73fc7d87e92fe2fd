"""Data Transfer Objects: plain containers that cross layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AuthResult:
    """Output of register/login: the user's public view plus a signed token."""

    user: dict[str, Any]
    token: str
