"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ArticleValidationError(Exception):
    """Raised by the application layer when an article fails validation.

    Carries the user-correctable messages collected on the entity.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class PersistenceError(Exception):
    """Raised when the backing store fails (connection loss, constraint violation)."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed: {reason}")


class MailDeliveryError(Exception):
    """Raised by a mail sender when a message could not be handed to the server."""
