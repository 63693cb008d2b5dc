"""
Tests for the local fallback store and the atomic upsert it writes with

Covers:
1. Basic upsert (insert then overwrite, one row per key)
2. Corrupt and missing entries
3. Error handling for invalid upsert arguments
"""
import pytest

from portfolio.shared.errors import StorageError
from portfolio.shared.local_store import LocalStoreEntry, PROFILE_KEY, PROJECTS_KEY
from portfolio.shared.upsert import atomic_upsert


def count_rows(store, key):
    db = store.Session()
    try:
        return db.query(LocalStoreEntry).filter(LocalStoreEntry.key == key).count()
    finally:
        db.close()


def test_missing_key_loads_as_none(store):
    assert store.load(PROJECTS_KEY) is None


def test_save_then_overwrite_keeps_one_row(store):
    store.save(PROJECTS_KEY, [{"id": "1", "title": "First"}])
    store.save(PROJECTS_KEY, [{"id": "2", "title": "Second"}])

    assert store.load(PROJECTS_KEY) == [{"id": "2", "title": "Second"}]
    assert count_rows(store, PROJECTS_KEY) == 1


def test_keys_are_independent(store):
    store.save(PROJECTS_KEY, [])
    store.save(PROFILE_KEY, {"name": "Harsh"})

    assert store.load(PROJECTS_KEY) == []
    assert store.load(PROFILE_KEY) == {"name": "Harsh"}


def test_corrupt_entry_raises_storage_error(store):
    db = store.Session()
    try:
        db.add(LocalStoreEntry(key=PROFILE_KEY, value="not json at all"))
        db.commit()
    finally:
        db.close()

    with pytest.raises(StorageError) as exc_info:
        store.load(PROFILE_KEY)

    assert exc_info.value.key == PROFILE_KEY


def test_corrupt_entry_can_be_overwritten(store):
    db = store.Session()
    try:
        db.add(LocalStoreEntry(key=PROJECTS_KEY, value="[{"))
        db.commit()
    finally:
        db.close()

    store.save(PROJECTS_KEY, [{"id": "1"}])

    assert store.load(PROJECTS_KEY) == [{"id": "1"}]


def test_delete_removes_entry(store):
    store.save(PROJECTS_KEY, [{"id": "1"}])

    store.delete(PROJECTS_KEY)

    assert store.load(PROJECTS_KEY) is None


def test_upsert_rejects_unknown_fields(store):
    db = store.Session()
    try:
        with pytest.raises(ValueError):
            atomic_upsert(db, LocalStoreEntry, 'nonexistent_field', 'x', {'value': '[]'})

        with pytest.raises(ValueError):
            atomic_upsert(
                db,
                LocalStoreEntry,
                'key',
                'x',
                {'value': '[]'},
                timestamp_field='nonexistent_timestamp',
            )
    finally:
        db.close()
