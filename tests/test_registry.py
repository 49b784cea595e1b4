"""
Tests for the model registry.
"""

from kvmodel import MemoryStore, Model

from conftest import Person


def test_models_register_on_construction(registry, store):
    people = Model("person", Person, store=store, registry=registry)
    assert people in registry
    assert registry.models() == [people]
    assert people.registry is registry


def test_register_is_idempotent(registry, store):
    people = Model("person", Person, store=store, registry=registry)
    registry.register(people)
    assert len(registry) == 1


def test_models_may_share_a_name(registry, store):
    first = Model("person", Person, store=store, registry=registry)
    second = Model("person", Person, store=store, registry=registry)
    assert registry.find("person") == [first, second]
    assert registry.find("pet") == []


def test_unregister(registry, store):
    people = Model("person", Person, store=store, registry=registry)
    assert registry.unregister(people) is True
    assert registry.unregister(people) is False
    assert people not in registry


def test_reset_truncates_every_model(registry, storage):
    people = Model("person", Person, store=MemoryStore("person", storage), registry=registry)
    pets = Model("pet", store=MemoryStore("pet", storage), registry=registry)
    people.create({"name": "Ada"})
    pets.create({})
    registry.reset()
    assert people.count() == 0
    assert pets.count() == 0
    assert len(registry) == 2


def test_clear_forgets_models_but_keeps_records(registry, store):
    people = Model("person", Person, store=store, registry=registry)
    people.create({"name": "Ada"})
    registry.clear()
    assert len(registry) == 0
    assert people.count() == 1
    assert list(registry) == []
