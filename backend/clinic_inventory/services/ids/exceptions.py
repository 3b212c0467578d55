"""Business-ID allocation exceptions."""

from clinic_inventory.services.exceptions import ServiceError


class IdAllocationError(ServiceError):
    """Base class for business-ID allocation failures."""

    pass


class CounterUnavailableError(IdAllocationError):
    """The counter store could not be reached or updated.

    Fatal to the current create request. Not retried here; the caller may
    retry the whole request.
    """

    def __init__(self, sequence_name: str, reason: str | None = None):
        self.sequence_name = sequence_name
        message = f"Sequence counter '{sequence_name}' is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DuplicateIdError(IdAllocationError):
    """The record store rejected an insert because a unique field already holds the value."""

    def __init__(self, field: str, value: object = None):
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for unique field '{field}'")


class RetryExhaustedError(IdAllocationError):
    """The generated business ID collided on every allowed attempt."""

    def __init__(self, sequence_name: str, field: str, attempts: int, last_value: str | None = None):
        self.sequence_name = sequence_name
        self.field = field
        self.attempts = attempts
        self.last_value = last_value
        super().__init__(
            f"Failed to allocate a unique {field} from sequence '{sequence_name}' after {attempts} attempts"
        )
