import os

import pytest

from vaktija.core import db
from vaktija.core.cache_helper import CacheHelper, DatabaseKeyValueStore, create_store
from vaktija.calendar.vaktija_backend import VaktijaCache


@pytest.fixture
def database(tmp_path):
    db.dispose_db()
    db.init_db(db_url=f"sqlite:///{tmp_path / 'test.db'}")
    yield
    db.dispose_db()


@pytest.fixture(params=["file", "database"])
def store(request, tmp_path):
    if request.param == "file":
        return CacheHelper(str(tmp_path / "cache"))
    request.getfixturevalue("database")
    return DatabaseKeyValueStore()


def test_store_get_put_clear(store) -> None:
    assert store.get("vaktija_cache_77_2026") is None

    store.put("vaktija_cache_77_2026", '{"a": 1}')
    store.put("vaktija_cache_77_2026", '{"a": 2}')
    store.put("other_key", "x")

    assert store.get("vaktija_cache_77_2026") == '{"a": 2}'
    assert store.clear("vaktija_cache_") == 1
    assert store.get("vaktija_cache_77_2026") is None
    assert store.get("other_key") == "x"


def test_vaktija_cache_round_trip(store, year_record) -> None:
    cache = VaktijaCache(store)

    assert cache.get(77, 2026) is None
    cache.put(77, 2026, year_record)

    assert cache.get(77, 2026) == year_record
    assert cache.get(77, 2025) is None
    assert cache.get(78, 2026) is None


def test_corrupt_entry_is_a_miss(store) -> None:
    cache = VaktijaCache(store)
    store.put(VaktijaCache.cache_key(77, 2026), "{not json")

    assert cache.get(77, 2026) is None

    store.put(VaktijaCache.cache_key(77, 2026), '{"id": 77}')
    assert cache.get(77, 2026) is None


def test_corrupt_cache_file_is_a_miss(tmp_path) -> None:
    helper = CacheHelper(str(tmp_path))
    with open(os.path.join(str(tmp_path), "vaktija_cache_1_2026.json"), "w") as f:
        f.write("garbage")

    assert helper.get("vaktija_cache_1_2026") is None


def test_write_failure_is_swallowed(tmp_path, year_record) -> None:
    helper = CacheHelper(str(tmp_path))
    os.makedirs(helper._get_cache_file("vaktija_cache_77_2026"))  # a directory where the file should go

    VaktijaCache(helper).put(77, 2026, year_record)

    assert helper.get("vaktija_cache_77_2026") is None


def test_database_store_without_init_is_a_miss() -> None:
    db.dispose_db()
    store = DatabaseKeyValueStore()

    assert store.get("vaktija_cache_77_2026") is None
    store.put("vaktija_cache_77_2026", "{}")


def test_create_store_from_config(tmp_path) -> None:
    file_store = create_store({"cache": {"backend": "file", "directory": str(tmp_path / "c")}})
    assert isinstance(file_store, CacheHelper)
    assert file_store.cache_dir == str(tmp_path / "c")

    db.dispose_db()
    try:
        db_store = create_store({"cache": {"backend": "database"}, "database": {"path": str(tmp_path / "v.db")}})
        assert isinstance(db_store, DatabaseKeyValueStore)
        assert (tmp_path / "v.db").exists()
    finally:
        db.dispose_db()
