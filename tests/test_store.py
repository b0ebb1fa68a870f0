import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from todo_service.exceptions import ValidationError
from todo_service.store import SEED_TITLES, InMemoryStore


class TestCreate:
    def test_ids_strictly_increase(self, store):
        ids = [store.create(f"Task {i}")["id"] for i in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5
        assert ids[0] == 1

    def test_ids_not_reused_after_delete(self, store):
        first = store.create("A")
        second = store.create("B")
        assert store.delete(second["id"]) is True
        third = store.create("C")
        assert third["id"] > second["id"] > first["id"]

    @pytest.mark.parametrize("title", ["", "   ", None, 42, ["a"]])
    def test_rejects_unusable_title(self, store, title):
        with pytest.raises(ValidationError):
            store.create(title)
        assert store.list_all() == []

    def test_trims_title_and_sets_defaults(self, store):
        todo = store.create("  a  ")
        assert todo["title"] == "a"
        assert todo["completed"] is False
        assert todo["created_at"].tzinfo is not None

    def test_rejected_create_does_not_consume_an_id(self, store):
        with pytest.raises(ValidationError):
            store.create("  ")
        assert store.create("ok")["id"] == 1


class TestGetAndUpdate:
    def test_get_missing_returns_none(self, store):
        assert store.get(99) is None

    def test_update_completed_leaves_other_fields(self, store):
        todo = store.create("Write report")
        updated = store.update(todo["id"], {"completed": True})
        assert updated is not None
        assert updated["completed"] is True
        assert updated["title"] == "Write report"
        assert updated["created_at"] == todo["created_at"]
        assert updated["id"] == todo["id"]

    def test_update_missing_returns_none(self, store):
        assert store.update(12345, {"completed": True}) is None

    def test_update_trims_title(self, store):
        todo = store.create("old")
        assert store.update(todo["id"], {"title": "  new  "})["title"] == "new"

    @pytest.mark.parametrize("title", ["", "  ", None, 7])
    def test_update_rejects_bad_title_and_changes_nothing(self, store, title):
        todo = store.create("keep me")
        with pytest.raises(ValidationError):
            store.update(todo["id"], {"title": title, "completed": True})
        current = store.get(todo["id"])
        assert current["title"] == "keep me"
        assert current["completed"] is False

    def test_update_ignores_id_and_created_at(self, store):
        todo = store.create("fixed")
        updated = store.update(todo["id"], {"id": 500, "created_at": None})
        assert updated["id"] == todo["id"]
        assert updated["created_at"] == todo["created_at"]

    def test_empty_update_returns_record_unchanged(self, store):
        todo = store.create("same")
        assert store.update(todo["id"], {}) == todo


class TestDelete:
    def test_delete_then_get_is_not_found(self, store):
        todo = store.create("gone")
        assert store.delete(todo["id"]) is True
        assert store.get(todo["id"]) is None

    def test_delete_twice(self, store):
        todo = store.create("twice")
        assert store.delete(todo["id"]) is True
        assert store.delete(todo["id"]) is False


class TestSnapshots:
    def test_list_returns_snapshot(self, store):
        store.create("A")
        listed = store.list_all()
        listed.clear()
        assert len(store.list_all()) == 1

    def test_mutating_returned_records_does_not_leak(self, store):
        todo = store.create("A")
        todo["title"] = "hacked"
        store.list_all()[0]["completed"] = True
        store.get(todo["id"])["title"] = "hacked again"
        current = store.get(todo["id"])
        assert current["title"] == "A"
        assert current["completed"] is False

    def test_list_preserves_insertion_order(self, store):
        for title in ["c", "a", "b"]:
            store.create(title)
        assert [t["title"] for t in store.list_all()] == ["c", "a", "b"]


class TestStats:
    def test_empty(self, store):
        assert store.stats() == {"total": 0, "completed": 0, "pending": 0, "completionRate": 0}

    def test_three_with_one_completed(self, store):
        ids = [store.create(t)["id"] for t in ("A", "B", "C")]
        store.update(ids[0], {"completed": True})
        assert store.stats() == {"total": 3, "completed": 1, "pending": 2, "completionRate": 33}

    def test_rate_rounds_half_up(self, store):
        ids = [store.create(f"T{i}")["id"] for i in range(8)]
        store.update(ids[0], {"completed": True})
        # 1/8 = 12.5%
        assert store.stats()["completionRate"] == 13

    def test_two_of_three_rounds_up(self, store):
        ids = [store.create(t)["id"] for t in ("A", "B", "C")]
        store.update(ids[0], {"completed": True})
        store.update(ids[1], {"completed": True})
        assert store.stats()["completionRate"] == 67


class TestClearAndSeed:
    def test_clear_resets_collection_and_ids(self, store):
        store.create("A")
        store.create("B")
        store.clear()
        assert store.list_all() == []
        assert store.create("C")["id"] == 1

    def test_new_store_is_empty(self):
        assert InMemoryStore().list_all() == []

    def test_seed_inserts_samples_with_first_completed(self, store):
        store.seed()
        todos = store.list_all()
        assert [t["title"] for t in todos] == list(SEED_TITLES)
        assert [t["completed"] for t in todos] == [True, False, False]


def test_scenario_create_update_delete_list(store):
    a = store.create("A")
    b = store.create("B")
    store.update(a["id"], {"completed": True})
    store.delete(b["id"])
    todos = store.list_all()
    assert len(todos) == 1
    assert todos[0]["title"] == "A"
    assert todos[0]["completed"] is True


def test_concurrent_creates_get_unique_ids(store):
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: store.create(f"Task {i}"), range(200)))
    ids = sorted(t["id"] for t in created)
    assert ids == list(range(1, 201))


def test_mutations_are_logged(store, caplog):
    caplog.set_level(logging.INFO, logger="todo_service.store")
    todo = store.create("Logged")
    store.update(todo["id"], {"completed": True})
    store.delete(todo["id"])
    store.get(todo["id"])
    messages = [r.getMessage() for r in caplog.records]
    assert any("Created todo id=1" in m for m in messages)
    assert any("Updated todo id=1" in m for m in messages)
    assert any("Deleted todo id=1" in m for m in messages)
    assert any("not found" in m for m in messages)
