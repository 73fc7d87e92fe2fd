"""Tests for boot-time backend selection."""

import logging

import pytest

from billing.domain.exceptions import BackendUnavailableError
from billing.infrastructure.backend_resolver import BackendAttempt, resolve
from tests.fakes import failing_factory, static_factory


class TestResolve:

    @pytest.mark.asyncio
    async def test_first_success_wins(self):
        resolution = await resolve("products", [
            BackendAttempt("primary", static_factory("P")),
            BackendAttempt("secondary", static_factory("S")),
        ])
        assert resolution.repository == "P"
        assert resolution.backend_id == "primary"
        assert not resolution.fell_back

    @pytest.mark.asyncio
    async def test_falls_through_and_records_failures(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolution = await resolve("users", [
                BackendAttempt("postgres", failing_factory("connection refused")),
                BackendAttempt("memory", static_factory("M")),
            ])
        assert resolution.backend_id == "memory"
        assert resolution.failures == (("postgres", "connection refused"),)
        assert resolution.fell_back
        assert "postgres unavailable" in caplog.text

    @pytest.mark.asyncio
    async def test_later_attempts_not_built_after_success(self):
        built = []

        async def tracking():
            built.append("second")
            return "S"

        await resolve("invoices", [
            BackendAttempt("first", static_factory("F")),
            BackendAttempt("second", tracking),
        ])
        assert built == []

    @pytest.mark.asyncio
    async def test_all_failing_raises(self):
        with pytest.raises(BackendUnavailableError, match="tried: a, b"):
            await resolve("sqlite", [
                BackendAttempt("a", failing_factory("nope")),
                BackendAttempt("b", failing_factory("nope")),
            ])
