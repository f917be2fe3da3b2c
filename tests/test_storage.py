"""Tests for keyed storage and per-key locking."""

from __future__ import annotations

import threading

import pytest

from stepauth_core.storage import InMemoryKeyValueStore, KeyedLock, StorageError, update_record


class TestInMemoryKeyValueStore:

    def test_put_get_delete(self):
        store = InMemoryKeyValueStore()
        store.put("a", 1)

        assert store.get("a") == 1
        assert store.delete("a")
        assert store.get("a") is None
        assert not store.delete("a")

    def test_compare_and_swap(self):
        store = InMemoryKeyValueStore()

        assert store.compare_and_swap("k", None, "v1")
        assert not store.compare_and_swap("k", None, "v2")
        assert not store.compare_and_swap("k", "stale", "v2")
        assert store.compare_and_swap("k", "v1", "v2")
        assert store.get("k") == "v2"

    def test_compare_and_swap_delete(self):
        store = InMemoryKeyValueStore()
        store.put("k", "v")

        assert store.compare_and_swap("k", "v", None)
        assert store.get("k") is None

    def test_items_is_snapshot(self):
        store = InMemoryKeyValueStore()
        store.put("a", 1)
        snapshot = store.items()
        store.put("b", 2)

        assert snapshot == [("a", 1)]
        assert store.count == 2


class TestUpdateRecord:

    def test_creates_and_updates(self):
        store = InMemoryKeyValueStore()

        assert update_record(store, "n", lambda cur: (cur or 0) + 1) == 1
        assert update_record(store, "n", lambda cur: (cur or 0) + 1) == 2

    def test_gives_up_when_always_losing(self):
        class LosingStore(InMemoryKeyValueStore):
            def compare_and_swap(self, key, expected, new):
                return False

        with pytest.raises(StorageError):
            update_record(LosingStore(), "k", lambda cur: "new", max_retries=3)

    def test_no_lost_updates_under_contention(self):
        """CAS retries keep every increment even without a lock."""
        store = InMemoryKeyValueStore()

        def worker():
            for _ in range(200):
                update_record(store, "n", lambda cur: (cur or 0) + 1, max_retries=1000)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get("n") == 1600


class TestKeyedLock:

    def test_reentrant(self):
        locks = KeyedLock()
        with locks.hold("a"):
            with locks.hold("a"):
                pass

    def test_serializes_same_key(self):
        locks = KeyedLock()
        counter = {"value": 0}

        def worker():
            for _ in range(500):
                with locks.hold("p"):
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter["value"] == 2000

    def test_different_keys_independent(self):
        locks = KeyedLock()
        entered = threading.Event()

        def other():
            with locks.hold("b"):
                entered.set()

        with locks.hold("a"):
            thread = threading.Thread(target=other)
            thread.start()
            assert entered.wait(timeout=2)
            thread.join()
