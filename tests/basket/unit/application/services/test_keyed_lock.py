"""Unit tests for KeyedLock."""

import asyncio

import pytest

from basket.application.services import KeyedLock


class TestKeyedLock:
    """Tests for per-key mutual exclusion."""

    @pytest.mark.asyncio
    async def test_same_key_runs_one_at_a_time(self):
        locks = KeyedLock()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with locks.hold("u1"):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(5)))

        assert peak == 1

    @pytest.mark.asyncio
    async def test_different_keys_run_concurrently(self):
        locks = KeyedLock()
        both_inside = asyncio.Event()
        inside = set()

        async def worker(key):
            async with locks.hold(key):
                inside.add(key)
                if len(inside) == 2:
                    both_inside.set()
                await asyncio.wait_for(both_inside.wait(), timeout=1)

        await asyncio.gather(worker("u1"), worker("u2"))

        assert inside == {"u1", "u2"}

    @pytest.mark.asyncio
    async def test_same_key_preserves_arrival_order(self):
        locks = KeyedLock()
        order = []

        async def worker(n):
            async with locks.hold("u1"):
                await asyncio.sleep(0)
                order.append(n)

        await asyncio.gather(*(worker(n) for n in range(4)))

        assert order == [0, 1, 2, 3]

    @pytest.mark.asyncio
    async def test_released_keys_are_dropped(self):
        locks = KeyedLock()

        async with locks.hold("u1"):
            assert locks.is_locked("u1")
            assert len(locks) == 1

        assert not locks.is_locked("u1")
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_released_when_body_raises(self):
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("u1"):
                raise RuntimeError("boom")

        assert len(locks) == 0
        async with locks.hold("u1"):
            assert locks.is_locked("u1")
