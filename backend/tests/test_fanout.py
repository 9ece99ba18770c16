"""Tests for the settle-all combinator."""

from __future__ import annotations

import asyncio

import pytest

from mytrip.utils.fanout import settle_all


async def _ok(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(message):
    raise RuntimeError(message)


class TestSettleAll:
    @pytest.mark.asyncio
    async def test_keeps_input_order(self):
        outcomes = await settle_all([_ok("slow", 0.02), _ok("fast")])
        assert [o.value for o in outcomes] == ["slow", "fast"]
        assert all(o.ok for o in outcomes)

    @pytest.mark.asyncio
    async def test_failure_does_not_hide_siblings(self):
        outcomes = await settle_all([_ok(1), _fail("boom"), _ok(3)])

        assert [o.ok for o in outcomes] == [True, False, True]
        assert isinstance(outcomes[1].error, RuntimeError)
        assert outcomes[2].value == 3

    @pytest.mark.asyncio
    async def test_empty_input(self):
        assert await settle_all([]) == []

    @pytest.mark.asyncio
    async def test_accepts_generator(self):
        outcomes = await settle_all(_ok(i) for i in range(3))
        assert [o.value for o in outcomes] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await settle_all([_ok(1), cancelled()])

    @pytest.mark.asyncio
    async def test_none_is_a_success_value(self):
        outcomes = await settle_all([_ok(None)])
        assert outcomes[0].ok
        assert outcomes[0].value is None
