from web3jobs.cache import TTLCache


def test_get_missing_key_returns_none(clock):
    cache = TTLCache(60, clock=clock)
    assert cache.get("nope") is None


def test_set_then_get_within_ttl(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", [1, 2, 3])
    clock.advance(59)
    assert cache.get("k") == [1, 2, 3]


def test_entry_expires_lazily_and_is_removed(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", "v")
    clock.advance(61)
    assert len(cache) == 1  # nothing sweeps in the background
    assert cache.get("k") is None
    assert len(cache) == 0


def test_entry_is_still_valid_exactly_at_expiry(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", "v")
    clock.advance(60)
    assert cache.get("k") == "v"


def test_per_entry_ttl_overrides_default(clock):
    cache = TTLCache(300, clock=clock)
    cache.set("short", "a", ttl_s=5)
    cache.set("long", "b")
    clock.advance(10)
    assert cache.get("short") is None
    assert cache.get("long") == "b"


def test_set_replaces_and_refreshes_expiry(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("k", "old")
    clock.advance(50)
    cache.set("k", "new")
    clock.advance(50)
    assert cache.get("k") == "new"


def test_falsy_values_are_cached(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("empty", [])
    assert cache.get("empty") == []


def test_clear(clock):
    cache = TTLCache(60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert cache.get("a") is None
