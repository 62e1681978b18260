"""Error taxonomy shared by every storage backend."""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Machine-readable persistence error codes."""

    NOT_FOUND = "NOT_FOUND"
    OPTIMISTIC_LOCK = "OPTIMISTIC_LOCK"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"


class PersistenceError(Exception):
    """Base persistence error with code and user-safe message."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ConflictError(PersistenceError):
    """An update could not be applied to the stored row.

    Callers that do not care about the cause can catch this class; the two
    subclasses tell a missing row from a stale version.
    """


class NotFoundError(ConflictError):
    """Raised when an update references an id with no stored row."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, entity_id: Optional[int]) -> None:
        super().__init__(f"{entity} {entity_id} does not exist")
        self.entity = entity
        self.entity_id = entity_id


class OptimisticLockError(ConflictError):
    """Raised when the supplied version does not match the stored version."""

    code = ErrorCode.OPTIMISTIC_LOCK

    def __init__(self, entity: str, entity_id: Optional[int], version: int) -> None:
        super().__init__(f"{entity} {entity_id} was updated by another transaction (stale version {version})")
        self.entity = entity
        self.entity_id = entity_id
        self.version = version


class ConstraintViolationError(PersistenceError):
    """Raised when a write references a row that does not exist or breaks an integrity rule."""

    code = ErrorCode.CONSTRAINT_VIOLATION
