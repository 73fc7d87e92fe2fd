"""Unit tests for the User aggregate."""

from datetime import datetime, timezone

import pytest

from billing.domain.exceptions import ValidationError
from billing.domain.model.user import User


def _user(**overrides):
    fields = {"name": "Ana Souza", "email": "Ana@Acme.io", "password_hash": "hashed:pw"}
    fields.update(overrides)
    return User.create(**fields)


class TestUserCreate:

    def test_email_is_lower_cased(self):
        assert _user().email == "ana@acme.io"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            _user(email="not-an-email")

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError, match="Name too short"):
            _user(name="A")

    def test_missing_hash_rejected(self):
        with pytest.raises(ValidationError, match="Password hash"):
            _user(password_hash="")

    def test_hash_not_in_repr(self):
        assert "hashed:pw" not in repr(_user())


class TestUserViews:

    def test_public_view_has_no_password_hash(self):
        user = _user(id=4, created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert user.public_view() == {
            "id": 4,
            "name": "Ana Souza",
            "email": "ana@acme.io",
            "created_at": "2024-01-02T00:00:00+00:00",
        }

    def test_with_changes_keeps_hash_and_created_at(self):
        user = _user(id=4)
        changed = user.with_changes(email="ana.souza@acme.io")
        assert changed.email == "ana.souza@acme.io"
        assert changed.password_hash == user.password_hash
        assert changed.created_at == user.created_at
        assert changed.name == user.name

    def test_from_row(self):
        row = {
            "id": 9,
            "name": "Bruno",
            "email": "bruno@acme.io",
            "password_hash": "h",
            "created_at": "2024-03-04T05:06:07.000Z",
        }
        user = User.from_row(row)
        assert user.id == 9
        assert user.created_at.year == 2024
