from __future__ import annotations

from tawjih.services.cache import TTLCache, cache_key
from tawjih.services.rate_limit import RateLimiter, client_ip


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_cache_entry_expires_after_ttl() -> None:
    clock = FakeClock()
    cache = TTLCache(default_ttl=300, clock=clock)
    cache.set("/jobs", {"success": True})
    cache.set("/jobs/slug", {"success": True}, ttl=1800)

    clock.now += 301

    assert cache.get("/jobs") is None
    assert cache.get("/jobs/slug") == {"success": True}
    assert len(cache) == 1


def test_cache_evicts_oldest_when_full() -> None:
    cache = TTLCache(max_entries=2, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    cache.set("c", 3)

    assert cache.get("a") is None
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_cache_cleanup_and_clear() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("short", 1, ttl=10)
    cache.set("long", 2, ttl=100)
    clock.now += 50

    assert cache.cleanup() == 1
    assert cache.get("long") == 2
    cache.clear()
    assert len(cache) == 0


def test_cache_reclaims_expired_slots_before_evicting() -> None:
    clock = FakeClock()
    cache = TTLCache(max_entries=2, clock=clock)
    cache.set("stale", 1, ttl=10)
    cache.set("fresh", 2, ttl=100)
    clock.now += 50

    cache.set("new", 3)

    assert len(cache) == 2
    assert cache.get("fresh") == 2
    assert cache.get("new") == 3


def test_cache_key_sorts_and_skips_empty_params() -> None:
    assert cache_key("/jobs", {"page": 2, "sector": None, "limit": 10}) == "/jobs?limit=10&page=2"
    assert cache_key("/jobs/abc") == "/jobs/abc"


def test_rate_limiter_blocks_after_max_and_resets() -> None:
    clock = FakeClock()
    limiter = RateLimiter(max_requests=2, window_seconds=60, clock=clock)

    assert [limiter.hit("1.2.3.4") for _ in range(3)] == [True, True, False]
    assert limiter.hit("5.6.7.8") is True

    clock.now += 61
    assert limiter.hit("1.2.3.4") is True


def test_rate_limiter_forgets_oldest_client_when_full() -> None:
    limiter = RateLimiter(max_requests=1, max_clients=2, clock=FakeClock())
    limiter.hit("a")
    limiter.hit("b")
    limiter.hit("c")

    assert len(limiter) == 2
    assert limiter.hit("a") is True
    assert limiter.hit("c") is False


def test_client_ip_prefers_forwarded_header() -> None:
    assert client_ip({"x-forwarded-for": "10.0.0.1, 172.16.0.1"}, "127.0.0.1") == "10.0.0.1"
    assert client_ip({"x-real-ip": "10.0.0.2"}, "127.0.0.1") == "10.0.0.2"
    assert client_ip({}, "127.0.0.1") == "127.0.0.1"
    assert client_ip({}) == "unknown"
