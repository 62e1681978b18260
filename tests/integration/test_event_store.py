"""Event aggregate behaviour, run against every backend."""
import pytest

from scouts.db.errors import ConstraintViolationError, NotFoundError, OptimisticLockError
from scouts.db.schemas import Group


def test_round_trip_with_groups(stores, group_factory, new_event):
    wolves, foxes = group_factory("Wolves"), group_factory("Foxes")
    created = stores.events.create(new_event(groups=[wolves, foxes]))
    assert created.version == 0
    assert created.participating_groups == frozenset({wolves, foxes})
    assert stores.events.find_by_id(created.id) == created


def test_event_without_groups_reads_back_empty(stores, new_event):
    created = stores.events.create(new_event())
    found = stores.events.find_by_id(created.id)
    assert found.participating_groups == frozenset()
    assert stores.events.find_all() == [found]


def test_update_fully_replaces_groups(stores, group_factory, new_event):
    wolves, foxes, bears = group_factory("Wolves"), group_factory("Foxes"), group_factory("Bears")
    created = stores.events.create(new_event(groups=[wolves, foxes]))
    updated = stores.events.update(created.model_copy(update={"participating_groups": frozenset({bears})}))
    assert updated.version == 1
    assert updated.group_ids == {bears.id}
    cleared = stores.events.update(updated.model_copy(update={"participating_groups": frozenset()}))
    assert stores.events.find_by_id(created.id).participating_groups == frozenset()
    assert cleared.version == 2


def test_stale_update_changes_nothing(stores, group_factory, new_event):
    wolves, foxes = group_factory("Wolves"), group_factory("Foxes")
    created = stores.events.create(new_event(groups=[wolves]))
    winner = stores.events.update(created.model_copy(update={"location": "Forest"}))
    with pytest.raises(OptimisticLockError):
        stores.events.update(created.model_copy(update={"participating_groups": frozenset({foxes})}))
    assert stores.events.find_by_id(created.id) == winner


def test_update_missing_event_is_not_found(stores, new_event):
    with pytest.raises(NotFoundError):
        stores.events.update(new_event().model_copy(update={"id": 404}))


def test_unknown_group_is_a_constraint_violation(stores, group_factory, new_event):
    wolves = group_factory("Wolves")
    ghost = Group(id=404, name="Ghost")
    with pytest.raises(ConstraintViolationError):
        stores.events.create(new_event(groups=[wolves, ghost]))
    assert stores.events.find_all() == []

    created = stores.events.create(new_event(groups=[wolves]))
    with pytest.raises(ConstraintViolationError):
        stores.events.update(created.model_copy(update={"participating_groups": frozenset({ghost})}))
    assert stores.events.find_by_id(created.id) == created


def test_find_by_group_keeps_complete_group_set(stores, group_factory, new_event):
    wolves, foxes = group_factory("Wolves"), group_factory("Foxes")
    camp = stores.events.create(new_event("Camp", groups=[wolves, foxes]))
    hike = stores.events.create(new_event("Hike", groups=[foxes]))
    stores.events.create(new_event("Open day"))

    assert stores.events.find_by_group_id(wolves.id) == [camp]
    assert stores.events.find_by_group_id(foxes.id) == [camp, hike]
    assert stores.events.find_by_group_id(wolves.id)[0].group_ids == {wolves.id, foxes.id}
    assert stores.events.find_by_group_id(404) == []


def test_group_rename_visible_through_event(stores, group_factory, new_event):
    wolves = group_factory("Wolves")
    created = stores.events.create(new_event(groups=[wolves]))
    renamed = stores.groups.update(wolves.model_copy(update={"name": "Grey Wolves"}))
    assert stores.events.find_by_id(created.id).participating_groups == frozenset({renamed})


def test_group_delete_detaches_but_keeps_event(stores, group_factory, new_event):
    wolves, foxes = group_factory("Wolves"), group_factory("Foxes")
    created = stores.events.create(new_event(groups=[wolves, foxes]))
    stores.groups.delete(wolves.id)
    found = stores.events.find_by_id(created.id)
    assert found.group_ids == {foxes.id}
    assert found.version == created.version
    assert stores.events.find_by_group_id(wolves.id) == []


def test_delete_event(stores, group_factory, new_event):
    wolves = group_factory("Wolves")
    created = stores.events.create(new_event(groups=[wolves]))
    stores.events.delete(created.id)
    stores.events.delete(created.id)
    assert stores.events.find_by_id(created.id) is None
    assert stores.events.find_by_group_id(wolves.id) == []
    assert stores.groups.find_by_id(wolves.id) == wolves


def test_camp_scenario(stores, group_factory, new_event):
    groups = [group_factory(f"Group {n}") for n in range(1, 8)]
    seventh = groups[-1]
    assert seventh.id == 7

    camp = stores.events.create(new_event("Camp"))
    assert (camp.id, camp.version, camp.participating_groups) == (1, 0, frozenset())

    assigned = stores.events.update(camp.model_copy(update={"participating_groups": frozenset({seventh})}))
    assert assigned.version == 1
    assert assigned.group_ids == {7}

    with pytest.raises(OptimisticLockError):
        stores.events.update(camp.model_copy(update={"name": "Summer Camp"}))

    found = stores.events.find_by_id(1)
    assert (found.id, found.version, found.name, found.group_ids) == (1, 1, "Camp", {7})


def test_unsaved_group_is_a_constraint_violation(stores, group_factory, new_event):
    wolves = group_factory("Wolves")
    with pytest.raises(ConstraintViolationError):
        stores.events.create(new_event(groups=[wolves, Group(name="Unsaved")]))
    assert stores.events.find_all() == []

    created = stores.events.create(new_event(groups=[wolves]))
    with pytest.raises(ConstraintViolationError):
        stores.events.update(created.model_copy(update={"participating_groups": frozenset({Group(name="Unsaved")})}))
    assert stores.events.find_by_id(created.id) == created
