"""Glue between synchronous click commands and the async application layer."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from billing.infrastructure.bootstrap import Backends, open_backends
from billing.infrastructure.config import Settings

T = TypeVar("T")


def run(operation: Callable[[Backends, Settings], Awaitable[T]]) -> T:
    """Resolve backends, await *operation* against them, then release them."""
    settings = Settings.from_env()

    async def _main() -> T:
        async with open_backends(settings) as backends:
            return await operation(backends, settings)

    return asyncio.run(_main())
