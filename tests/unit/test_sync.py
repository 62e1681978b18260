import pytest

from scouts.db.errors import ConstraintViolationError
from scouts.db.repositories.sync import contact_rows, group_link_rows
from scouts.db.schemas import Contact, Group


def _contact(name):
    return Contact(name=name, phone_number="123", email=f"{name}@example.com", relationship="Parent")


def test_contact_rows_carry_position():
    rows = contact_rows([_contact("b"), _contact("a"), _contact("b")])
    assert [(r["contact_order"], r["name"]) for r in rows] == [(0, "b"), (1, "a"), (2, "b")]
    assert set(rows[0]) == {"contact_order", "name", "phone_number", "email", "relationship"}


def test_contact_rows_empty():
    assert contact_rows(()) == []


def test_group_link_rows_are_unique_and_sorted():
    groups = [Group(id=3, name="c"), Group(id=1, name="a"), Group(id=3, version=1, name="c2")]
    assert group_link_rows(groups) == [{"group_id": 1}, {"group_id": 3}]


def test_group_link_rows_empty():
    assert group_link_rows(frozenset()) == []


def test_group_link_rows_reject_unsaved_group():
    with pytest.raises(ConstraintViolationError):
        group_link_rows([Group(id=2, name="saved"), Group(name="unsaved")])
