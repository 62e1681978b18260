"""Group store behaviour, run against every backend."""
import pytest

from scouts.db.errors import NotFoundError, OptimisticLockError
from scouts.db.schemas import Group


def test_create_assigns_id_and_version_zero(stores):
    created = stores.groups.create(Group(name="Wolves", id=123, version=9))
    assert created.id is not None
    assert created.version == 0
    assert stores.groups.find_by_id(created.id) == created


def test_find_missing_returns_none(stores):
    assert stores.groups.find_by_id(404) is None


def test_update_increments_version(stores):
    created = stores.groups.create(Group(name="Wolves"))
    updated = stores.groups.update(created.model_copy(update={"name": "Foxes"}))
    assert updated.version == 1
    assert stores.groups.find_by_id(created.id) == updated


def test_stale_update_rejected_and_state_kept(stores):
    created = stores.groups.create(Group(name="Wolves"))
    winner = stores.groups.update(created.model_copy(update={"name": "Foxes"}))
    with pytest.raises(OptimisticLockError) as exc:
        stores.groups.update(created.model_copy(update={"name": "Bears"}))
    assert exc.value.entity_id == created.id
    assert exc.value.version == 0
    assert stores.groups.find_by_id(created.id) == winner


def test_update_of_missing_group_is_not_found(stores):
    with pytest.raises(NotFoundError):
        stores.groups.update(Group(id=404, version=0, name="Ghost"))


def test_delete_is_idempotent(stores):
    created = stores.groups.create(Group(name="Wolves"))
    stores.groups.delete(created.id)
    stores.groups.delete(created.id)
    stores.groups.delete(404)
    assert stores.groups.find_by_id(created.id) is None


def test_find_all_ordered_by_id(stores):
    names = ["Wolves", "Beavers", "Foxes"]
    created = [stores.groups.create(Group(name=n)) for n in names]
    assert stores.groups.find_all() == sorted(created, key=lambda g: g.id)


def test_duplicate_names_allowed(stores):
    a = stores.groups.create(Group(name="Wolves"))
    b = stores.groups.create(Group(name="Wolves"))
    assert a.id != b.id
