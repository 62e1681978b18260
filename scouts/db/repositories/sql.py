"""
Shared plumbing for the SQLAlchemy-backed stores.

Each write runs in one transaction on the store's session: the owner row
and its child rows are committed together or rolled back together. Version
checks are a single conditional UPDATE whose affected row count decides
between success and conflict. Writes read their result back before the
commit, so a returned aggregate is exactly what the transaction wrote.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scouts.db.errors import ConstraintViolationError, NotFoundError, OptimisticLockError

logger = logging.getLogger(__name__)


class SqlStoreBase:
    """Base for relational stores sharing one session."""

    entity: str = "Aggregate"
    table: Table

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Commit on success; roll back and re-raise on any failure."""
        try:
            yield self.db
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("%s write violated a constraint: %s", self.entity, e.orig)
            raise ConstraintViolationError(f"{self.entity} write violated a constraint") from e
        except Exception:
            self.db.rollback()
            raise

    def insert_row(self, values: Dict[str, Any]) -> int:
        """Insert the owner row with version 0 and return its new id."""
        result = self.db.execute(insert(self.table).values(version=0, **values))
        return result.inserted_primary_key[0]

    def versioned_update(self, aggregate_id: Optional[int], version: int, values: Dict[str, Any]) -> int:
        """Write ``values`` only if the stored version is ``version``; return the new version."""
        result = self.db.execute(
            update(self.table)
            .where(self.table.c.id == aggregate_id, self.table.c.version == version)
            .values(version=version + 1, **values)
        )
        if result.rowcount == 1:
            return version + 1
        exists = self.db.execute(select(self.table.c.id).where(self.table.c.id == aggregate_id)).first()
        if exists is None:
            logger.warning("Update of missing %s %s rejected", self.entity, aggregate_id)
            raise NotFoundError(self.entity, aggregate_id)
        logger.warning("Stale update of %s %s at version %s rejected", self.entity, aggregate_id, version)
        raise OptimisticLockError(self.entity, aggregate_id, version)

    def delete_where(self, table: Table, column: str, value: int) -> None:
        self.db.execute(delete(table).where(table.c[column] == value))
