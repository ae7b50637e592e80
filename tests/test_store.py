import json

import pytest

from core.models import Assignment, EntityStatus
from core.store import EntityStore, HistoryStore
from exceptions.custom_errors import EntityNotFoundError, HistoryFileError, InvalidEntityError


@pytest.fixture
def store():
    return EntityStore()


def test_create_get_and_list(store):
    created = store.create_entity("participant", {"name": "Alice", "group": "1"})

    assert store.get_entity("participant", created.id) == created
    assert store.list_entities("participant") == [created]
    assert store.list_entities("target") == []


def test_create_with_explicit_id(store):
    entity = store.create_entity("target", {"name": "Ward A", "required_count": 2}, "t-1")
    assert entity.id == "t-1"
    assert entity.get("required_count") == 2


def test_unknown_type_is_rejected(store):
    with pytest.raises(InvalidEntityError):
        store.create_entity("room", {"name": "R1"})
    with pytest.raises(InvalidEntityError):
        store.list_entities("room")


@pytest.mark.parametrize("count", [0, -1, "2", True, 1.5])
def test_invalid_required_count_is_rejected(store, count):
    with pytest.raises(InvalidEntityError):
        store.create_entity("target", {"name": "T", "required_count": count})


def test_update_merges_attributes(store):
    entity = store.create_entity("participant", {"name": "Alice", "group": "1"})

    updated = store.update_entity("participant", entity.id, {"group": "2", "skills": ["a"]})

    assert updated.attributes == {"name": "Alice", "group": "2", "skills": ["a"]}
    assert updated.updated_at >= entity.updated_at
    # The earlier snapshot is untouched
    assert entity.get("group") == "1"


def test_delete_is_soft(store):
    entity = store.create_entity("participant", {"name": "Alice"})

    deleted = store.delete_entity("participant", entity.id)

    assert deleted.status == EntityStatus.INACTIVE
    assert store.list_entities("participant") == []
    assert store.get_entity("participant", entity.id).status == EntityStatus.INACTIVE


def test_snapshot_by_ids_keeps_requested_order(store):
    a = store.create_entity("participant", {"name": "A"}, "a")
    b = store.create_entity("participant", {"name": "B"}, "b")

    assert store.snapshot("participant", ["b", "a"]) == [b, a]
    assert store.snapshot("participant") == [a, b]


def test_snapshot_rejects_missing_or_inactive_ids(store):
    store.create_entity("participant", {"name": "A"}, "a")
    store.delete_entity("participant", "a")

    with pytest.raises(EntityNotFoundError):
        store.snapshot("participant", ["a"])
    with pytest.raises(EntityNotFoundError):
        store.snapshot("participant", ["zzz"])


def test_history_keeps_most_recent_entries(make_target):
    history = HistoryStore(history_length=2)
    targets = [make_target("t1", name="Ward A"), make_target("t2", name="Ward B"), make_target("t3", name="Ward C")]

    for target in targets:
        history.append([Assignment("p1", target.id, 1.0)], targets)

    assert history.get("p1") == ("Ward C", "Ward B")
    assert history.snapshot() == {"p1": ("Ward C", "Ward B")}
    assert history.get("unknown") == ()


def test_history_save_and_load(tmp_path, make_target):
    path = tmp_path / "history.json"
    history = HistoryStore(path=path)
    history.append([Assignment("p1", "t1", 1.0)], [make_target("t1", name="Ward A")])

    history.save()

    assert json.loads(path.read_text(encoding="utf-8")) == {"assignments": {"p1": ["Ward A"]}}
    reloaded = HistoryStore(path=path)
    assert reloaded.load() == {"p1": ("Ward A",)}


def test_history_loads_old_format(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"p1": ["Ward A", "Ward B", "Ward C"]}), encoding="utf-8")

    assert HistoryStore(history_length=2).load(path) == {"p1": ("Ward A", "Ward B")}


def test_history_load_of_missing_file_is_empty(tmp_path):
    assert HistoryStore(path=tmp_path / "missing.json").load() == {}


def test_history_load_rejects_corrupt_file(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(HistoryFileError):
        HistoryStore().load(path)


def test_history_save_needs_a_path():
    with pytest.raises(HistoryFileError):
        HistoryStore().save()


def test_snapshot_rejects_repeated_ids(store):
    store.create_entity("participant", {"name": "A"}, "a")

    with pytest.raises(InvalidEntityError, match="Duplicate participant ids"):
        store.snapshot("participant", ["a", "a"])
