"""
Tests for the SQLModel-backed record store.
"""

import pytest

from kvmodel import DuplicateRecordError, Model, SQLModelStore
from kvmodel.persistence import create_store

from conftest import Person


def test_crud_roundtrip(sql_store):
    sql_store.create({"id": "a", "name": "Ada", "age": 36})
    assert sql_store.get("a") == {"id": "a", "name": "Ada", "age": 36}

    updated = sql_store.update("a", {"age": 37})
    assert updated == {"id": "a", "name": "Ada", "age": 37}
    assert sql_store.update("missing", {"age": 1}) is None

    assert sql_store.delete("a") is True
    assert sql_store.delete("a") is False
    assert sql_store.get("a") is None


def test_order_and_filters(sql_store):
    sql_store.bulk_create([
        {"id": "c", "age": 1},
        {"id": "a", "age": 2},
    ])
    sql_store.create({"id": "b", "age": 1})
    assert [r["id"] for r in sql_store.list()] == ["c", "a", "b"]
    assert [r["id"] for r in sql_store.find({"age": 1})] == ["c", "b"]
    assert [r["id"] for r in sql_store.find({"age": 1}, first_only=True)] == ["c"]
    assert sql_store.count() == 3


def test_duplicate_id_in_bulk_create_writes_nothing(sql_store):
    sql_store.create({"id": "a"})
    with pytest.raises(DuplicateRecordError):
        sql_store.bulk_create([{"id": "b"}, {"id": "a"}])
    assert [r["id"] for r in sql_store.list()] == ["a"]


def test_soft_delete_and_truncate(sql_store):
    sql_store.create({"id": "a"})
    assert sql_store.soft_delete("a") is True
    assert "deletedAt" in sql_store.get("a")
    sql_store.truncate()
    assert sql_store.list() == []
    assert sql_store.count() == 0


def test_records_survive_a_new_store(tmp_path):
    url = f"sqlite:///{tmp_path / 'durable.db'}"
    SQLModelStore("person", database_url=url).create({"id": "a", "name": "Ada"})
    assert SQLModelStore("person", database_url=url).get("a") == {"id": "a", "name": "Ada"}
    assert SQLModelStore("pet", database_url=url).get("a") is None


def test_model_over_sql_store(sql_store):
    people = Model("person", Person, store=sql_store, settings={"timestamps": True})
    ada = people.create({"name": "Ada"})
    ada.age = 36
    ada.save()
    assert people.get(ada.id).age == 36
    assert people.get(ada.id).created_at is not None


def test_create_store_picks_backend_from_url(tmp_path, monkeypatch):
    monkeypatch.delenv("KVMODEL_STORE_URL", raising=False)
    assert type(create_store("person")).__name__ == "MemoryStore"
    sql = create_store("person", f"sqlite:///{tmp_path / 'x.db'}")
    assert isinstance(sql, SQLModelStore)

    monkeypatch.setenv("KVMODEL_STORE_URL", "sqlite://")
    assert isinstance(create_store("person"), SQLModelStore)


def test_create_store_rejects_unknown_scheme():
    from kvmodel import StoreError
    with pytest.raises(StoreError):
        create_store("person", "redis://localhost")


def test_replace_overwrites_the_whole_record(sql_store):
    sql_store.create({"id": "a", "name": "Ada", "deletedAt": "2024-01-01T00:00:00Z"})
    assert sql_store.replace("a", {"name": "Bob"}) == {"id": "a", "name": "Bob"}
    assert sql_store.get("a") == {"id": "a", "name": "Bob"}
    assert sql_store.replace("missing", {"id": "missing"}) is None
    assert sql_store.list() == [{"id": "a", "name": "Bob"}]
