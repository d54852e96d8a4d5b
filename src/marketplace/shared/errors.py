"""Error types that sit beside Protean's ValidationError and ObjectNotFoundError.

A ConflictError means the request was well formed but the current state of
the system does not allow it: stock ran out, or an order or application is
in a status the action cannot move it from. Callers refresh and retry
rather than fix their input.
"""


class ConflictError(Exception):
    """The requested change is incompatible with current state."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        return self.message


class InsufficientStockError(ConflictError):
    """Not enough units left to satisfy a line at checkout."""

    def __init__(self, title: str, available: int, **context):
        super().__init__(
            f"Insufficient stock for product: {title}. Available: {available}",
            title=title,
            available=available,
            **context,
        )
        self.available = available


class InvalidTransitionError(ConflictError):
    """A lifecycle action was requested from a status that does not allow it."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot transition from {current} to {target}",
            current=current,
            target=target,
        )
        self.current = current
        self.target = target
