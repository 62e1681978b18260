"""
Child collection synchronisation for the relational stores.

Owned children and association rows are always fully replaced: every row of
the owner is deleted and the current collection is inserted again. Callers
run this inside the transaction that writes the owner row.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Sequence

from sqlalchemy import Table, delete, insert
from sqlalchemy.orm import Session

from scouts.db import models
from scouts.db.errors import ConstraintViolationError
from scouts.db.schemas import Contact, Group

logger = logging.getLogger(__name__)


def replace_children(
    db: Session,
    table: Table,
    owner_column: str,
    owner_id: int,
    rows: Sequence[Dict[str, Any]],
) -> None:
    """Make ``table`` hold exactly ``rows`` for ``owner_id``."""
    db.execute(delete(table).where(table.c[owner_column] == owner_id))
    if rows:
        db.execute(insert(table), [{owner_column: owner_id, **row} for row in rows])


def contact_rows(contacts: Sequence[Contact]) -> List[Dict[str, Any]]:
    """Contact rows with ``contact_order`` set to each contact's position."""
    return [
        {
            "contact_order": position,
            "name": contact.name,
            "phone_number": contact.phone_number,
            "email": contact.email,
            "relationship": contact.relationship,
        }
        for position, contact in enumerate(contacts)
    ]


def group_link_rows(groups: Iterable[Group]) -> List[Dict[str, Any]]:
    """One link row per distinct group id. Every group must have been saved."""
    group_ids = {g.id for g in groups}
    if None in group_ids:
        logger.warning("Reference to unsaved group rejected")
        raise ConstraintViolationError("Group None does not exist")
    return [{"group_id": group_id} for group_id in sorted(group_ids)]


def sync_event_groups(db: Session, event_id: int, groups: Iterable[Group]) -> None:
    replace_children(db, models.EventGroup.__table__, "event_id", event_id, group_link_rows(groups))


def sync_scout_contacts(db: Session, scout_id: int, contacts: Sequence[Contact]) -> None:
    replace_children(db, models.ScoutContact.__table__, "scout_id", scout_id, contact_rows(contacts))


def sync_scout_groups(db: Session, scout_id: int, groups: Iterable[Group]) -> None:
    replace_children(db, models.ScoutGroup.__table__, "scout_id", scout_id, group_link_rows(groups))
