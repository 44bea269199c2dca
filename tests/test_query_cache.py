import threading

import pytest

from costume_rental.client.cache import QueryCache


def test_fetch_caches_value():
    cache = QueryCache()
    calls = []

    def loader():
        calls.append(1)
        return ["costume"]

    assert cache.fetch("/api/costumes", loader) == ["costume"]
    assert cache.fetch("/api/costumes", loader) == ["costume"]
    assert len(calls) == 1
    assert "/api/costumes" in cache


def test_concurrent_fetches_share_one_load():
    cache = QueryCache()
    started = threading.Event()
    release = threading.Event()
    calls = []
    results = []

    def slow_loader():
        calls.append(1)
        started.set()
        release.wait(timeout=5)
        return {"total_revenue": "0"}

    def fetch():
        results.append(cache.fetch("/api/admin/dashboard/stats", slow_loader))

    first = threading.Thread(target=fetch)
    first.start()
    assert started.wait(timeout=5)

    second = threading.Thread(target=fetch)
    second.start()
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert len(calls) == 1
    assert results == [{"total_revenue": "0"}, {"total_revenue": "0"}]


def test_failed_load_is_not_cached():
    cache = QueryCache()

    def failing():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        cache.fetch("/api/costumes", failing)

    assert "/api/costumes" not in cache
    assert cache.fetch("/api/costumes", lambda: []) == []


def test_invalidate_by_prefix():
    cache = QueryCache()
    cache.fetch("/api/costumes", lambda: 1)
    cache.fetch("/api/costumes?size=M", lambda: 2)
    cache.fetch("/api/categories", lambda: 3)

    dropped = cache.invalidate("/api/costumes")

    assert sorted(dropped) == ["/api/costumes", "/api/costumes?size=M"]
    assert list(cache.keys()) == ["/api/categories"]


def test_invalidate_during_load_skips_caching():
    cache = QueryCache()

    def loader():
        cache.invalidate("/api/admin/items")
        return ["stale"]

    assert cache.fetch("/api/admin/items", loader) == ["stale"]
    assert "/api/admin/items" not in cache


def test_clear():
    cache = QueryCache()
    cache.fetch("/api/admin/auth/user", lambda: {"id": "a1"})

    cache.clear()

    assert len(cache) == 0
    assert cache.get("/api/admin/auth/user") is None
