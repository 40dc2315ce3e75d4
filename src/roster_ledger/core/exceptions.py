class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an operation targets an entity id absent from the roster."""

    def __init__(self, entity_id: str):
        super().__init__(f"Entity not found: {entity_id}")
        self.entity_id = entity_id


class PersistenceError(DomainError):
    """Raised when the key-value store refuses a read or write."""

    def __init__(self, message: str, *, key: str | None = None):
        super().__init__(message)
        self.key = key
