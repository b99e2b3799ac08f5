from __future__ import annotations

import json
import logging

from docstore import DocumentStore, StoreOptions
from docstore.disk_store import DiskJsonDatabaseFile


def test_missing_file_creates_empty_database(store, db_path):
    assert db_path.exists()
    assert json.loads(db_path.read_text(encoding="utf-8")) == {}
    assert store.collection_names() == []


def test_missing_parent_directory_is_created(tmp_path, store_options):
    path = tmp_path / "nested" / "dir" / "db.json"
    with DocumentStore(path, store_options):
        pass

    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_saved_file_is_pretty_printed(store, db_path):
    store.insert_document("users", {"id": "u1", "username": "alice"})

    text = db_path.read_text(encoding="utf-8")
    assert text == json.dumps({"users": [{"id": "u1", "username": "alice"}]}, indent=2)


def test_round_trip_preserves_collections_and_order(db_path, store_options):
    with DocumentStore(db_path, store_options) as first:
        first.insert_document("users", {"username": "carol", "age": 41, "admin": False})
        first.insert_document("users", {"username": "alice", "tags": ["a", "b"], "meta": {"k": None}})
        first.insert_document("posts", {"title": "hello", "score": 1.5})
        expected = first.snapshot()

    with DocumentStore(db_path, store_options) as second:
        assert second.snapshot() == expected
        assert [d["username"] for d in second.find_documents("users")] == ["carol", "alice"]


def test_reload_rebuilds_indexes(db_path, store_options):
    with DocumentStore(db_path, store_options) as first:
        first.insert_document("users", {"username": "alice"})

    with DocumentStore(db_path, store_options) as second:
        assert len(second.find_documents("users", {"username": "alice"})) == 1
        assert second.find_documents("users", {"username": "nobody"}) == []


def test_corrupt_file_is_absorbed(db_path, store_options, caplog):
    db_path.write_text("{ not json", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="docstore.disk_store"):
        st = DocumentStore(db_path, store_options)

    assert st.collection_names() == []
    assert "DATABASE LOAD: failed to load" in caplog.text
    # left untouched until the next mutation
    assert db_path.read_text(encoding="utf-8") == "{ not json"

    st.insert_document("users", {"username": "alice"})
    assert len(json.loads(db_path.read_text(encoding="utf-8"))["users"]) == 1
    st.close()


def test_wrong_shape_is_absorbed(db_path, store_options):
    db_path.write_text(json.dumps({"users": {"not": "a list"}}), encoding="utf-8")

    with DocumentStore(db_path, store_options) as st:
        assert st.collection_names() == []


def test_failed_reload_keeps_memory_state(db_path, store_options):
    with DocumentStore(db_path, store_options) as st:
        st.insert_document("users", {"username": "alice"})
        db_path.write_text("garbage", encoding="utf-8")

        st.load_from_file()

        assert len(st.find_documents("users", {"username": "alice"})) == 1


def test_save_disabled_writes_nothing(tmp_path):
    path = tmp_path / "db.json"
    options = StoreOptions(backup_enabled=False, save_to_file=False, backup_path=tmp_path / "b")

    with DocumentStore(path, options) as st:
        st.insert_document("users", {"username": "alice"})
        assert len(st.find_documents("users")) == 1

    assert not path.exists()


def test_save_failure_is_logged_and_swallowed(tmp_path, caplog):
    # a directory where the file should be makes every write fail
    path = tmp_path / "db.json"
    path.mkdir()
    db_file = DiskJsonDatabaseFile(path)

    with caplog.at_level(logging.ERROR, logger="docstore.disk_store"):
        assert db_file.save({"users": []}) is False

    assert "DATABASE SAVE: failed to write" in caplog.text


def test_unserializable_value_is_not_fatal(store, caplog):
    with caplog.at_level(logging.ERROR, logger="docstore.disk_store"):
        doc = store.insert_document("users", {"username": "alice", "bad": {1, 2}})

    assert store.find_documents("users") == [doc]
    assert "DATABASE SAVE: failed to write" in caplog.text


def test_load_and_save_log_at_info(db_path, store_options, caplog):
    with caplog.at_level(logging.INFO, logger="docstore.disk_store"):
        with DocumentStore(db_path, store_options) as st:
            st.insert_document("users", {"username": "alice"})

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert any(m.startswith("DATABASE LOAD:") for m in messages)
    assert any(m.startswith("DATABASE SAVE: wrote") for m in messages)
