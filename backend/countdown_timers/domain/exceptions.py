"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class TimerValidationError(Exception):
    """Base class for rejected timer writes. Carries a list of human-readable details."""

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = list(details or [])
        super().__init__(message if not self.details else f"{message}: {'; '.join(self.details)}")


class InvalidInputError(TimerValidationError):
    """Raised when a required field is missing or a field is malformed."""

    def __init__(self, details: list[str] | None = None):
        super().__init__("Validation failed", details)


class InvalidRangeError(TimerValidationError):
    """Raised when a timer's end time is not strictly after its start time."""

    def __init__(self, details: list[str] | None = None):
        super().__init__("endTime must be after startTime", details)


class ForbiddenError(Exception):
    """Raised when a store tries to mutate a timer it does not own."""

    def __init__(self, store_domain: str | None, owner_domain: str):
        self.store_domain = store_domain
        self.owner_domain = owner_domain
        super().__init__(f"Store '{store_domain}' may not modify timers owned by '{owner_domain}'")


class StoreUnavailableError(Exception):
    """Raised when the timer record store cannot be reached or fails a write."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Timer store unavailable during {operation}")
