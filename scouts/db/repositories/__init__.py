"""
Per-aggregate repository modules for the relational backend.

Each store implements its contract from :mod:`scouts.db.repositories.base`
on top of one SQLAlchemy session.
"""

from .base import EventStore, GroupStore, RegistrationStore, ScoutStore, VersionedStore
from .events import SqlEventStore
from .groups import SqlGroupStore
from .registrations import SqlRegistrationStore
from .scouts import SqlScoutStore

__all__ = [
    "VersionedStore",
    "GroupStore",
    "EventStore",
    "ScoutStore",
    "RegistrationStore",
    "SqlGroupStore",
    "SqlEventStore",
    "SqlScoutStore",
    "SqlRegistrationStore",
]
