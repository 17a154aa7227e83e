import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Dict


class EntityLocks:
    """
    One asyncio.Lock per entity key ("customer:<id>", "supplier:<id>").

    Serializes read-modify-write cycles against the same entity within this
    process. Locks for different keys never contend. A key's lock is dropped
    once nobody holds or waits for it.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: str):
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                self._locks.pop(key, None)

    def customer(self, customer_id: str):
        return self.hold(f"customer:{customer_id}")

    def supplier(self, supplier_id: str):
        return self.hold(f"supplier:{supplier_id}")

    def __len__(self) -> int:
        return len(self._locks)
