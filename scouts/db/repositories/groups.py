"""
Group repository (relational).

Groups have no children. Deleting a group removes its event and scout
associations but never the events or scouts themselves.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select

from scouts.db import models
from scouts.db.repositories.base import GroupStore
from scouts.db.repositories.sql import SqlStoreBase
from scouts.db.schemas import Group

logger = logging.getLogger(__name__)


def group_from_row(row, prefix: str = "") -> Group:
    return Group(id=row[f"{prefix}id"], version=row[f"{prefix}version"], name=row[f"{prefix}name"])


class SqlGroupStore(SqlStoreBase, GroupStore):
    entity = "Group"
    table = models.Group.__table__

    def create(self, group: Group) -> Group:
        with self.transaction():
            group_id = self.insert_row({"name": group.name})
            created = self.find_by_id(group_id)
        logger.debug("Created group %s", group_id)
        return created

    def update(self, group: Group) -> Group:
        with self.transaction():
            new_version = self.versioned_update(group.id, group.version, {"name": group.name})
            updated = self.find_by_id(group.id)
        logger.debug("Updated group %s to version %s", group.id, new_version)
        return updated

    def delete(self, group_id: int) -> None:
        with self.transaction():
            self.delete_where(models.EventGroup.__table__, "group_id", group_id)
            self.delete_where(models.ScoutGroup.__table__, "group_id", group_id)
            self.delete_where(self.table, "id", group_id)
        logger.debug("Deleted group %s", group_id)

    def find_by_id(self, group_id: int) -> Optional[Group]:
        row = self.db.execute(select(self.table).where(self.table.c.id == group_id)).mappings().first()
        return group_from_row(row) if row is not None else None

    def find_all(self) -> List[Group]:
        rows = self.db.execute(select(self.table).order_by(self.table.c.id)).mappings()
        return [group_from_row(row) for row in rows]
