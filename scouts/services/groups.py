"""Group management service."""

from __future__ import annotations

import logging
from typing import List, Optional

from scouts.db.repositories.base import GroupStore
from scouts.db.schemas import Group

logger = logging.getLogger(__name__)


class GroupManagementService:
    def __init__(self, groups: GroupStore) -> None:
        self._groups = groups

    def create_group(self, group: Group) -> Group:
        """Create a group.

        Raises:
            ValueError: If a group with the same name already exists.
        """
        if any(existing.name == group.name for existing in self._groups.find_all()):
            raise ValueError(f"Group with name '{group.name}' already exists")
        created = self._groups.create(group)
        logger.info("Group %s created: %s", created.id, created.name)
        return created

    def get_group(self, group_id: int) -> Optional[Group]:
        return self._groups.find_by_id(group_id)

    def get_all_groups(self) -> List[Group]:
        return self._groups.find_all()

    def update_group(self, group: Group) -> Group:
        return self._groups.update(group)

    def delete_group(self, group_id: int) -> None:
        self._groups.delete(group_id)
