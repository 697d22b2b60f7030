import threading
from datetime import datetime, timedelta, timezone

from authcache.constants import CacheLocation
from authcache.storage.memory import MemoryStorage, create_memory_storage


def test_missing_entries_read_as_empty():
    storage = MemoryStorage()
    assert storage.get_item("nope") == ""
    assert storage.get_item_cookie("nope") == ""
    storage.remove_item("nope")


def test_crud_and_keys_snapshot():
    storage = create_memory_storage(CacheLocation.SESSION_STORAGE)
    assert storage.cache_location == CacheLocation.SESSION_STORAGE
    storage.set_item("a", "1")
    storage.set_item("b", "2")
    keys = storage.keys()
    storage.remove_item("a")
    # The snapshot is unaffected by later writes
    assert sorted(keys) == ["a", "b"]
    assert storage.keys() == ["b"]
    assert storage.contains("b")
    storage.clear()
    assert storage.keys() == []


def test_cookie_expiry():
    storage = MemoryStorage()
    storage.set_item_cookie("session", "s")
    storage.set_item_cookie("persistent", "p", 7)
    assert storage.get_item_cookie("session") == "s"
    assert storage.get_item_cookie("persistent") == "p"

    storage.set_item_cookie("persistent", "", -1)
    assert storage.get_item_cookie("persistent") == ""
    assert "persistent" not in storage.cookie_names()

    storage.clear_item_cookie("session")
    assert storage.get_item_cookie("session") == ""


def test_expired_cookie_is_purged_on_read():
    storage = MemoryStorage()
    storage.set_item_cookie("late", "v", 1)
    storage._cookies["late"] = ("v", datetime.now(timezone.utc) - timedelta(seconds=1))
    assert storage.get_item_cookie("late") == ""
    assert storage.cookie_names() == []


def test_cookie_expiration_time():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert MemoryStorage.cookie_expiration_time(2, now) == datetime(2024, 1, 3, tzinfo=timezone.utc)


def test_concurrent_writers():
    storage = MemoryStorage()

    def writer(n):
        for i in range(200):
            storage.set_item(f"w{n}.{i}", str(i))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(storage.keys()) == 800
