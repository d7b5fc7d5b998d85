import threading

import pytest

from afina.storage import SimpleLRU, Storage, ThreadSafeSimpleLRU


def _make(thread_safe, max_size):
    return ThreadSafeSimpleLRU(max_size) if thread_safe else SimpleLRU(max_size)


def test_storage_is_abstract():
    with pytest.raises(TypeError):
        Storage()


def test_default_max_size():
    assert SimpleLRU().max_size == 1024


@pytest.mark.parametrize("thread_safe", [False, True])
def test_put_get_roundtrip(thread_safe):
    s = _make(thread_safe, 100)
    assert s.put("key", "value") is True
    assert s.get("key") == "value"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_get_missing_returns_none(thread_safe):
    s = _make(thread_safe, 100)
    assert s.get("nope") is None


@pytest.mark.parametrize("thread_safe", [False, True])
def test_put_replaces(thread_safe):
    s = _make(thread_safe, 100)
    s.put("k", "first")
    assert s.put("k", "second") is True
    assert s.get("k") == "second"
    assert s.current_size == len("k") + len("second")


@pytest.mark.parametrize("thread_safe", [False, True])
def test_put_if_absent(thread_safe):
    s = _make(thread_safe, 100)
    assert s.put_if_absent("k", "v1") is True
    assert s.put_if_absent("k", "v2") is False
    assert s.get("k") == "v1"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_set_requires_existing_key(thread_safe):
    s = _make(thread_safe, 100)
    assert s.set("k", "v") is False
    assert "k" not in s
    s.put("k", "v")
    assert s.set("k", "w") is True
    assert s.get("k") == "w"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_delete(thread_safe):
    s = _make(thread_safe, 100)
    assert s.delete("k") is False
    s.put("k", "v")
    assert s.delete("k") is True
    assert s.get("k") is None
    assert s.current_size == 0
    assert len(s) == 0


@pytest.mark.parametrize("thread_safe", [False, True])
def test_too_large_entry_rejected(thread_safe):
    s = _make(thread_safe, 4)
    assert s.put("ab", "cde") is False
    assert s.put_if_absent("ab", "cde") is False
    s.put("a", "b")
    assert s.set("a", "bcdef") is False
    assert s.get("a") == "b"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_entry_exactly_max_size_accepted(thread_safe):
    s = _make(thread_safe, 4)
    assert s.put("ab", "cd") is True
    assert s.current_size == s.max_size


@pytest.mark.parametrize("thread_safe", [False, True])
def test_evicts_least_recently_used(thread_safe):
    s = _make(thread_safe, 4)
    s.put("a", "1")
    s.put("b", "2")
    s.put("c", "3")
    assert s.get("a") is None
    assert s.get("b") == "2"
    assert s.get("c") == "3"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_get_refreshes_entry(thread_safe):
    s = _make(thread_safe, 4)
    s.put("a", "1")
    s.put("b", "2")
    s.get("a")
    s.put("c", "3")
    assert s.get("b") is None
    assert s.get("a") == "1"
    assert s.get("c") == "3"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_growing_update_evicts_others(thread_safe):
    s = _make(thread_safe, 6)
    s.put("a", "1")
    s.put("b", "2")
    s.put("c", "3")
    assert s.set("c", "333") is True
    assert s.get("a") is None
    assert s.get("b") == "2"
    assert s.get("c") == "333"


@pytest.mark.parametrize("thread_safe", [False, True])
def test_updating_oldest_entry_keeps_it(thread_safe):
    s = _make(thread_safe, 6)
    s.put("a", "1")
    s.put("b", "2")
    s.put("c", "3")
    assert s.put("a", "111") is True
    assert s.get("a") == "111"
    assert s.get("b") is None
    assert s.get("c") == "3"
    assert s.current_size <= s.max_size


@pytest.mark.parametrize("thread_safe", [False, True])
def test_size_never_exceeds_max(thread_safe):
    s = _make(thread_safe, 20)
    for i in range(200):
        s.put(f"k{i % 13}", "x" * (i % 7))
        assert s.current_size <= s.max_size


def test_concurrent_access_keeps_invariants():
    s = ThreadSafeSimpleLRU(50)

    def worker(n):
        for i in range(300):
            key = f"{n}-{i % 10}"
            s.put(key, "v" * (i % 5))
            s.get(key)
            if i % 7 == 0:
                s.delete(key)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert s.current_size <= s.max_size
    s.put("final", "value")
    assert s.get("final") == "value"