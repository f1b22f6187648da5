import threading

from powerai.cache import Cache


def test_set_and_get():
    cache = Cache()
    cache.set("a", 1)
    assert cache.get("a") == 1


def test_get_missing_returns_default():
    cache = Cache()
    assert cache.get("missing") is None
    assert cache.get("missing", "fallback") == "fallback"


def test_set_overwrites():
    cache = Cache()
    cache.set("k", "first")
    cache.set("k", "second")
    assert cache.get("k") == "second"
    assert cache.size() == 1


def test_delete_removes_entry_and_ignores_missing():
    cache = Cache()
    cache.set("k", 1)
    cache.delete("k")
    cache.delete("never-there")
    assert cache.get("k") is None
    assert cache.size() == 0
    assert "k" not in cache


def test_keys_and_values_snapshot():
    cache = Cache()
    items = {"x": 10, "y": 20, "z": 30}
    for key, value in items.items():
        cache.set(key, value)
    assert sorted(cache.keys()) == sorted(items)
    assert sorted(cache.values()) == sorted(items.values())
    assert len(cache) == len(items)


def test_snapshot_is_independent():
    cache = Cache()
    cache.set("a", 1)
    snapshot = cache.keys()
    cache.set("b", 2)
    assert snapshot == ["a"]


def test_concurrent_writers():
    cache = Cache()

    def writer(offset):
        for i in range(200):
            cache.set(offset * 1000 + i, i)

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert cache.size() == 8 * 200