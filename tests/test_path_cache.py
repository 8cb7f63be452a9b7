import threading
from datetime import datetime, timedelta

from seo_paths.core.path_cache import PathCache


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


def test_entry_is_served_until_ttl_expires():
    clock = FakeClock()
    cache = PathCache(ttl_seconds=300, clock=clock)
    cache.set("leaf", "a/b/leaf")

    clock.advance(299)
    assert cache.get("leaf") == "a/b/leaf"

    clock.advance(1)
    assert cache.get("leaf") is None
    assert len(cache) == 0


def test_set_overwrites_and_refreshes_expiry():
    clock = FakeClock()
    cache = PathCache(ttl_seconds=10, clock=clock)
    cache.set("leaf", "old/leaf")
    clock.advance(8)
    cache.set("leaf", "new/leaf")
    clock.advance(8)

    assert cache.get("leaf") == "new/leaf"


def test_clear_removes_everything():
    cache = PathCache(ttl_seconds=300)
    cache.set("a", "a")
    cache.set("b", "a/b")

    assert cache.clear() == 2
    assert cache.get("a") is None
    assert cache.get("b") is None


def test_missing_key_returns_none():
    assert PathCache().get("nope") is None


def test_concurrent_access_from_many_threads():
    cache = PathCache(ttl_seconds=300)
    errors = []
    wrong_values = []
    start = threading.Barrier(8)

    def worker(n):
        try:
            start.wait()
            for i in range(500):
                key = f"{n}-{i % 10}"
                expected = f"root/{n}/{i % 10}"
                cache.set(key, expected)
                value = cache.get(key)
                # another thread's clear() may have dropped it in between
                if value is not None and value != expected:
                    wrong_values.append((key, value))
                if n == 0 and i % 50 == 0:
                    cache.clear()
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert wrong_values == []
    assert len(cache) <= 80
    for n in range(1, 8):
        value = cache.get(f"{n}-9")
        assert value is None or value == f"root/{n}/9"
