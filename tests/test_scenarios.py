"""
End-to-end usage scenarios of models and live records.
"""

from kvmodel import Model

from conftest import Person


def test_soft_delete_without_timestamps(make_model):
    people = make_model(timestamps=False, soft_delete=True)
    person = people.create({"name": "A"})
    assert person.id
    assert person.created_at is None

    people.delete(person.id)

    fetched = people.get(person.id)
    assert fetched is not None
    assert fetched.is_deleted
    assert person.id in people.list().ids


def test_bulk_build_mutate_then_save(people, store):
    persons = people.build_many([{"name": "1"}, {"name": "2"}])
    persons[0].name = "first"
    persons.save()

    stored = {r["id"]: r["name"] for r in store.list()}
    assert stored == {persons[0].id: "first", persons[1].id: "2"}


def test_independent_copies_last_write_wins(people):
    original = people.create({"name": "Ada", "age": 1})
    first = people.find_by_id(original.id)
    second = people.find_by_id(original.id)

    first.age = 2
    first.save()
    assert second.age == 1

    second.name = "Stale"
    second.save()
    stored = people.get(original.id)
    assert (stored.name, stored.age) == ("Stale", 1)


def test_sample_session(store):
    people = Model("person", Person, store=store, settings={"timestamps": False, "softDelete": True})
    people.truncate()

    person = people.build()
    person.name = "johnrey"
    person.age = 1
    person.save()

    person2 = people.create({"name": "john doe", "age": 2, "hobbies": []})
    person3 = people.build({"name": "jane doe", "age": 3, "hobbies": ["acting"]})
    person2.name = "ghege"
    person2.save()
    person3.save()

    people.create_many([{"name": str(n), "age": 1} for n in (1, 2, 3)])

    persons = people.build_many([{"name": str(n), "age": n} for n in (4, 5, 6)])
    persons[0].save()
    persons[1].name = "Not 5"
    persons[1].save()
    persons[0].delete()
    persons.save()

    everyone = people.list()
    everyone[1].name = "PERSON 1"
    everyone.save()

    for aged_one in people.find(age=1):
        aged_one.delete()

    jane = people.find_one(name="jane doe")
    assert jane is not None
    jane.age = 33
    jane.save()

    assert people.find_by_id(jane.id).age == 33
    assert people.get(person2.id).name == "PERSON 1"
    assert people.count() == 9
    assert {p.name for p in people.list() if p.is_deleted} == {"johnrey", "1", "2", "3", "4"}
