"""Runtime configuration read from the environment (and a local .env)."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEVELOPMENT_SECRET = "DEVELOPMENT-ONLY-SECRET-CHANGE-BEFORE-DEPLOYING"


@dataclass(frozen=True)
class Settings:
    app_name: str
    products_json: Path
    sqlite_file: Path
    database_url: str | None
    fallback_dir: Path
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 120
    bcrypt_rounds: int = 10
    db_connect_timeout: float = 5.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ*, defaulting to ``os.environ`` + .env."""
        if environ is None:
            load_dotenv()
            environ = os.environ
        cwd = Path.cwd()
        return cls(
            app_name=environ.get("APP_NAME", "Billing API"),
            products_json=Path(environ.get("PRODUCTS_JSON") or cwd / "products.json"),
            sqlite_file=Path(environ.get("SQLITE_FILE") or cwd / "billing.db"),
            database_url=environ.get("DATABASE_URL") or None,
            fallback_dir=Path(environ.get("FALLBACK_DIR") or tempfile.gettempdir()),
            jwt_secret=environ.get("JWT_SECRET") or DEVELOPMENT_SECRET,
            jwt_expires_minutes=int(environ.get("JWT_EXPIRES_MINUTES", "120")),
            bcrypt_rounds=int(environ.get("BCRYPT_ROUNDS", "10")),
            db_connect_timeout=float(environ.get("DB_CONNECT_TIMEOUT", "5")),
        )
