class HearthError(Exception):
    """Base class for every error raised by the runtime."""


class MissingResourceError(HearthError, LookupError):
    """Raised when a handler or caller requests a resource that was never added."""

    def __init__(self, type_key, operation):
        self.type_key = type_key
        self.operation = operation
        super().__init__(
            f"{operation}: no resource of type {type_key} exists in the state."
        )


class BorrowConflictError(HearthError):
    """Raised when a requested borrow overlaps an incompatible live borrow."""

    def __init__(self, type_key, operation, held):
        self.type_key = type_key
        self.operation = operation
        self.held = held
        super().__init__(
            f"{operation}: cannot borrow {type_key}, it is already borrowed ({held})."
        )


class StaleGuardError(HearthError):
    """Raised when a resource guard is used after it has been released."""


class TypeMismatchError(HearthError, TypeError):
    """Raised when a stored value is not an instance of the type it is keyed by."""


class InvalidParamError(HearthError, TypeError):
    """Raised when something other than Res[T] or ResMut[T] is used as a request."""


class InvalidHandlerError(HearthError, TypeError):
    """Raised when a function cannot be bound as a handler."""


class InvalidLabelError(HearthError, TypeError):
    """Raised when a schedule label is not a ScheduleLabel class or instance."""
