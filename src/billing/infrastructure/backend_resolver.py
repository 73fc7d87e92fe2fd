"""Boot-time backend selection.

Each aggregate gets an ordered list of attempts; the first one whose
factory succeeds wins.  Failures are logged and kept on the result so the
outside world can see *why* a fallback happened, but they never change
behavior once a backend has been chosen.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from billing.domain.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BackendAttempt(Generic[T]):
    backend_id: str
    factory: Callable[[], Awaitable[T]]


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """The backend that won, plus every ``(backend_id, reason)`` that lost."""

    repository: T
    backend_id: str
    failures: tuple[tuple[str, str], ...] = ()

    @property
    def fell_back(self) -> bool:
        return bool(self.failures)


async def resolve(aggregate: str, attempts: Sequence[BackendAttempt[T]]) -> Resolution[T]:
    """Return the first attempt that builds successfully.

    Raises BackendUnavailableError only when every attempt failed.
    """
    failures: list[tuple[str, str]] = []
    for attempt in attempts:
        try:
            built = await attempt.factory()
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning(
                "%s: backend %s unavailable (%s)", aggregate, attempt.backend_id, reason
            )
            failures.append((attempt.backend_id, reason))
            continue
        logger.info("%s: using backend %s", aggregate, attempt.backend_id)
        return Resolution(repository=built, backend_id=attempt.backend_id, failures=tuple(failures))

    tried = ", ".join(backend_id for backend_id, _ in failures) or "none"
    raise BackendUnavailableError(f"No {aggregate} backend available (tried: {tried})")
