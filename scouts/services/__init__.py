"""
Application services.

Services depend only on store interfaces, enforce the business rules that sit
above persistence and raise ``ValueError`` when a rule is broken. Store errors
such as ``OptimisticLockError`` propagate unchanged.
"""

from .events import EventManagementService
from .groups import GroupManagementService
from .registrations import RegistrationManagementService

__all__ = [
    "GroupManagementService",
    "EventManagementService",
    "RegistrationManagementService",
]
