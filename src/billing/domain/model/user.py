"""User aggregate.

Users are only created through registration; the CRUD surface may change
``name`` and ``email`` but never the password hash.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email

from billing.domain.exceptions import ValidationError
from billing.domain.model.value_objects import normalize_id, parse_timestamp

NAME_MIN_LEN = 2


@dataclass(frozen=True)
class User:
    """Aggregate root for application users.

    Invariants:
    - ``email`` is syntactically valid and lower-cased
    - ``password_hash`` is never part of ``public_view()``
    """

    id: int | None
    name: str
    email: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=lambda: parse_timestamp(None))

    @staticmethod
    def create(
        name: Any,
        email: Any,
        password_hash: Any,
        id: Any = None,
        created_at: Any = None,
    ) -> User:
        """Validate and normalize raw input into a User."""
        name_str = str(name if name is not None else "").strip()
        if len(name_str) < NAME_MIN_LEN:
            raise ValidationError(f"Name too short (minimum {NAME_MIN_LEN} characters)")

        hash_str = str(password_hash if password_hash is not None else "").strip()
        if not hash_str:
            raise ValidationError("Password hash is missing")

        return User(
            id=normalize_id(id),
            name=name_str,
            email=User.normalize_email(email),
            password_hash=hash_str,
            created_at=parse_timestamp(created_at),
        )

    @staticmethod
    def normalize_email(email: Any) -> str:
        """Lower-case and syntax-check an email address."""
        email_str = str(email if email is not None else "").strip().lower()
        try:
            result = validate_email(email_str, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValidationError(f"Invalid email: {exc}") from exc
        return result.normalized.lower()

    def with_changes(self, name: Any = None, email: Any = None) -> User:
        """Return a re-validated copy with a new name and/or email."""
        return User.create(
            id=self.id,
            name=self.name if name is None else name,
            email=self.email if email is None else email,
            password_hash=self.password_hash,
            created_at=self.created_at,
        )

    # --- Projections ----------------------------------------------------------

    def public_view(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> User:
        return User.create(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )
