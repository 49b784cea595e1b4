"""
Shared fixtures for kvmodel tests.
"""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from kvmodel import MemoryStorage, MemoryStore, Model, ModelRegistry, Schema, SQLModelStore
from kvmodel.core import policies


class Person(Schema):
    name: str
    age: int = 0
    hobbies: List[str] = []


@pytest.fixture
def storage():
    """Fresh localStorage-like storage, isolated from the shared default."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return MemoryStore("person", storage)


@pytest.fixture
def sql_store(tmp_path):
    return SQLModelStore("person", database_url=f"sqlite:///{tmp_path / 'records.db'}")


@pytest.fixture
def registry():
    return ModelRegistry()


@pytest.fixture
def clock(monkeypatch):
    """Deterministic clock: every policy timestamp is one second after the previous."""
    ticks = []

    def fake_now():
        ticks.append(datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=len(ticks)))
        return ticks[-1]

    monkeypatch.setattr(policies, "utc_now", fake_now)
    return ticks


@pytest.fixture
def make_model(store):
    """Build a Person model over the test store with the given settings."""
    def factory(**settings):
        return Model("person", Person, store=store, settings=settings)
    return factory


@pytest.fixture
def people(make_model):
    return make_model()
