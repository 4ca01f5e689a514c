"""
SQLite task storage tests (no server involved)
"""
import sqlite3

import pytest

from taskboard import db as db_module
from taskboard.db import Database, get_db


@pytest.fixture
def database(tmp_path):
    return Database(str(tmp_path / "nested" / "tasks.db"))


def test_creates_database_directory(tmp_path):
    path = tmp_path / "a" / "b" / "tasks.db"
    Database(str(path))
    assert path.exists()


def test_insert_assigns_id_and_timestamps(database):
    task = database.insert_task({"title": "Buy milk"})

    assert len(task["id"]) == 32
    assert task["description"] == ""
    assert task["status"] == "pending"
    assert task["created_at"] == task["updated_at"]
    assert database.get_task(task["id"]) == task


def test_ids_are_unique(database):
    ids = {database.insert_task({"title": f"t{i}"})["id"] for i in range(20)}
    assert len(ids) == 20


def test_list_newest_first(database):
    first = database.insert_task({"title": "first"})
    second = database.insert_task({"title": "second"})

    assert [t["id"] for t in database.list_tasks()] == [second["id"], first["id"]]


def test_update_overwrites_fields(database):
    task = database.insert_task({"title": "old", "description": "keep?", "status": "pending"})

    updated = database.update_task(task["id"], {
        "title": "new",
        "description": "",
        "status": "completed",
    })

    assert updated["title"] == "new"
    assert updated["description"] == ""
    assert updated["status"] == "completed"
    assert updated["created_at"] == task["created_at"]
    assert updated["updated_at"] >= updated["created_at"]


def test_update_ignores_immutable_fields(database):
    task = database.insert_task({"title": "t"})

    updated = database.update_task(task["id"], {"id": "other", "created_at": "1970", "title": "t2"})

    assert updated["id"] == task["id"]
    assert updated["created_at"] == task["created_at"]
    assert updated["title"] == "t2"


def test_update_never_moves_updated_at_before_created_at(database, monkeypatch):
    task = database.insert_task({"title": "t"})
    monkeypatch.setattr(db_module, "utcnow", lambda: "2000-01-01T00:00:00.000000+00:00")

    updated = database.update_task(task["id"], {"title": "t"})

    assert updated["updated_at"] == task["created_at"]


def test_update_missing_returns_none(database):
    database.insert_task({"title": "t"})
    assert database.update_task("missing", {"title": "x"}) is None
    assert [t["title"] for t in database.list_tasks()] == ["t"]


def test_delete_returns_removed_record(database):
    task = database.insert_task({"title": "gone"})

    assert database.delete_task(task["id"]) == task
    assert database.get_task(task["id"]) is None
    assert database.delete_task(task["id"]) is None


def test_status_constraint(database):
    with pytest.raises(sqlite3.IntegrityError):
        database.insert_task({"title": "t", "status": "done"})


def test_ping(database, tmp_path):
    assert database.ping() is True

    database.db_path = str(tmp_path)
    assert database.ping() is False


def test_get_db_uses_env_path(tmp_path, monkeypatch):
    path = tmp_path / "env.db"
    monkeypatch.setenv("DB_PATH", str(path))
    monkeypatch.setattr(db_module, "_db_instance", None)

    instance = get_db()

    assert instance.db_path == str(path)
    assert get_db() is instance
