"""
SQLAlchemy table definitions for the relational backend.

Stores query these tables through SQLAlchemy Core so that join results stay
flat rows; the ORM classes exist to declare the schema.
"""

from .base import Base

from .groups import Group
from .events import Event, EventGroup
from .scouts import Scout, ScoutContact, ScoutGroup
from .registrations import Registration

__all__ = [
    "Base",
    "Group",
    "Event",
    "EventGroup",
    "Scout",
    "ScoutContact",
    "ScoutGroup",
    "Registration",
]
