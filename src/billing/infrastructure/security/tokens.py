"""JWT issuance and verification (HS256 by default)."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt as pyjwt

from billing.application.ports import TokenIssuer
from billing.domain.exceptions import AuthenticationError


class JwtTokenIssuer(TokenIssuer):

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=2),
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in

    def issue(self, payload: Mapping[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        claims = {**payload, "iat": now, "exp": now + self._expires_in}
        return pyjwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return pyjwt.decode(token, self._secret, algorithms=[self._algorithm])
        except pyjwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc
