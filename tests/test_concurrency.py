# tests/test_concurrency.py
import asyncio
import time
import httpx

from conftest import ADMIN

async def _add(app, n):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.post("/api/cart", json={"id": n, "name": f"P{n}", "price": n + 1, "images": []})

async def _create(app, n):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        return await ac.post("/api/admin/products", headers=ADMIN,
                             json={"name": f"P{n}", "price": n + 1, "description": "d", "images": ["i"]})

def test_concurrent_cart_adds_are_not_lost(app, read_store):
    async def run():
        return await asyncio.gather(*(_add(app, n) for n in range(20)))

    results = asyncio.run(run())
    assert all(r.status_code == 201 for r in results)
    assert sorted(item["id"] for item in read_store("cart")) == list(range(20))

def test_concurrent_creates_get_unique_ids(app, read_store):
    async def run():
        return await asyncio.gather(*(_create(app, n) for n in range(10)))

    results = asyncio.run(run())
    ids = sorted(r.json()["id"] for r in results)
    assert ids == list(range(1, 11))
    assert len(read_store("products")) == 10

def test_store_lock_serializes_read_modify_write(app, read_store, monkeypatch):
    store = app.state.store
    original_load = store.load

    def slow_load(name):
        # every writer reads before anyone saves unless the lock serializes them
        records = original_load(name)
        time.sleep(0.05)
        return records
    monkeypatch.setattr(store, "load", slow_load)

    async def run():
        return await asyncio.gather(*(_add(app, n) for n in range(5)))

    results = asyncio.run(run())
    assert all(r.status_code == 201 for r in results)
    assert sorted(item["id"] for item in read_store("cart")) == list(range(5))
    assert sorted(len(r.json()) for r in results) == [1, 2, 3, 4, 5]
