"""
In-memory implementations of every store contract.

These mirror the relational stores exactly, including version checks,
reference checks and delete cascades, and are meant for tests and local
runs without a database.
"""

from .events import InMemoryEventStore
from .groups import InMemoryGroupStore
from .ids import IdAllocator
from .registrations import InMemoryRegistrationStore
from .scouts import InMemoryScoutStore

__all__ = [
    "IdAllocator",
    "InMemoryGroupStore",
    "InMemoryEventStore",
    "InMemoryScoutStore",
    "InMemoryRegistrationStore",
]
