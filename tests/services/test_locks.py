import asyncio

import pytest

from shopledger.services.locks import EntityLocks


@pytest.mark.asyncio
async def test_same_entity_is_serialized():
    locks = EntityLocks()
    events = []

    async def worker(name):
        async with locks.customer("c1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


@pytest.mark.asyncio
async def test_different_entities_do_not_contend():
    locks = EntityLocks()
    inside = asyncio.Event()

    async def holder():
        async with locks.customer("c1"):
            inside.set()
            await asyncio.sleep(0.05)

    async def other():
        await inside.wait()
        async with locks.supplier("c1"):
            return True

    task = asyncio.create_task(holder())
    assert await asyncio.wait_for(other(), timeout=0.02)
    await task


@pytest.mark.asyncio
async def test_unused_locks_are_released():
    locks = EntityLocks()
    async with locks.customer("c1"):
        assert len(locks) == 1
    assert len(locks) == 0

    with pytest.raises(RuntimeError):
        async with locks.customer("c2"):
            raise RuntimeError("boom")
    assert len(locks) == 0
