"""
Scout repository (relational).

A scout row is joined with both its contacts and its groups, so every
contact appears once per group and every group once per contact. The
mapper collapses both: contacts by ``contact_order``, groups by id.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select

from scouts.db import models
from scouts.db.repositories import sync
from scouts.db.repositories.base import ScoutStore
from scouts.db.repositories.groups import group_from_row
from scouts.db.repositories.mapping import AggregatePlan, CollectionPlan, assemble
from scouts.db.repositories.sql import SqlStoreBase
from scouts.db.schemas import Contact, Scout

logger = logging.getLogger(__name__)

_scouts = models.Scout.__table__
_contacts = models.ScoutContact.__table__
_scout_groups = models.ScoutGroup.__table__
_groups = models.Group.__table__


_scout_columns = (
    "name",
    "birth_date",
    "address",
    "phone_number",
    "health_insurance",
    "allergy_info",
    "vaccination_info",
    "last_updated",
)


def _scout_fields(scout: Scout) -> Dict[str, Any]:
    fields = {column: getattr(scout, column) for column in _scout_columns}
    fields["name_search"] = scout.name.casefold()
    return fields


def _scout_root(row) -> Dict[str, Any]:
    return {column: row[column] for column in ("id", "version", *_scout_columns)}


def _contact_from_row(row) -> Contact:
    return Contact(
        name=row["contact_name"],
        phone_number=row["contact_phone_number"],
        email=row["contact_email"],
        relationship=row["contact_relationship"],
    )


SCOUT_PLAN = AggregatePlan(
    target=Scout,
    key_column="id",
    build_root=_scout_root,
    collections=(
        CollectionPlan(attribute="contacts", key_column="contact_order", build=_contact_from_row, ordered=True),
        CollectionPlan(attribute="groups", key_column="group_id", build=lambda row: group_from_row(row, prefix="group_")),
    ),
)


def _joined_select():
    return (
        select(
            _scouts,
            _contacts.c.contact_order,
            _contacts.c.name.label("contact_name"),
            _contacts.c.phone_number.label("contact_phone_number"),
            _contacts.c.email.label("contact_email"),
            _contacts.c.relationship.label("contact_relationship"),
            _groups.c.id.label("group_id"),
            _groups.c.version.label("group_version"),
            _groups.c.name.label("group_name"),
        )
        .select_from(
            _scouts.outerjoin(_contacts, _contacts.c.scout_id == _scouts.c.id)
            .outerjoin(_scout_groups, _scout_groups.c.scout_id == _scouts.c.id)
            .outerjoin(_groups, _groups.c.id == _scout_groups.c.group_id)
        )
        .order_by(_scouts.c.id)
    )


class SqlScoutStore(SqlStoreBase, ScoutStore):
    entity = "Scout"
    table = _scouts

    def create(self, scout: Scout) -> Scout:
        with self.transaction() as db:
            scout_id = self.insert_row(_scout_fields(scout))
            sync.sync_scout_contacts(db, scout_id, scout.contacts)
            sync.sync_scout_groups(db, scout_id, scout.groups)
            created = self.find_by_id(scout_id)
        logger.debug("Created scout %s with %d contacts", scout_id, len(scout.contacts))
        return created

    def update(self, scout: Scout) -> Scout:
        with self.transaction() as db:
            new_version = self.versioned_update(scout.id, scout.version, _scout_fields(scout))
            sync.sync_scout_contacts(db, scout.id, scout.contacts)
            sync.sync_scout_groups(db, scout.id, scout.groups)
            updated = self.find_by_id(scout.id)
        logger.debug("Updated scout %s to version %s", scout.id, new_version)
        return updated

    def delete(self, scout_id: int) -> None:
        with self.transaction():
            self.delete_where(models.Registration.__table__, "scout_id", scout_id)
            self.delete_where(_contacts, "scout_id", scout_id)
            self.delete_where(_scout_groups, "scout_id", scout_id)
            self.delete_where(_scouts, "id", scout_id)
        logger.debug("Deleted scout %s", scout_id)

    def find_by_id(self, scout_id: int) -> Optional[Scout]:
        found = self._find(_scouts.c.id == scout_id)
        return found[0] if found else None

    def find_all(self) -> List[Scout]:
        return self._find()

    def find_by_name(self, name: str) -> List[Scout]:
        return self._find(_scouts.c.name_search.contains(name.casefold(), autoescape=True))

    def _find(self, condition=None) -> List[Scout]:
        stmt = _joined_select()
        if condition is not None:
            stmt = stmt.where(condition)
        return assemble(self.db.execute(stmt).mappings(), SCOUT_PLAN)
