"""Domain exceptions."""


class StoreError(Exception):
    """Base class for persistent store failures."""


class StoreNotInitializedError(StoreError):
    """Store used before initialize() completed."""

    def __init__(self, message: str = "Store is not initialized") -> None:
        super().__init__(message)


class StoreInitializationError(StoreError):
    """Database file could not be opened or prepared."""


class RecordNotFoundError(LookupError):
    """Referenced record does not exist."""


class EmployeeNotFoundError(RecordNotFoundError):
    def __init__(self, employee_id: int) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class InvalidRatingError(ValueError):
    """Rating missing, not an integer or outside 1-5."""

    def __init__(self, field: str, value: object) -> None:
        self.field = field
        self.value = value
        if value is None:
            message = f"Rating '{field}' is required (1-5)"
        else:
            message = f"Rating '{field}' must be an integer between 1 and 5, got {value!r}"
        super().__init__(message)


class PhotoRejectedError(ValueError):
    """Uploaded photo has a disallowed type or exceeds the size limit."""
