"""Error taxonomy for the order API.

Every error carries the HTTP status it maps to and a JSON-ready body, so the
web layer never has to know which failure it is looking at.
"""

from typing import Dict, List, Optional


class OrderError(Exception):
    """Base exception for all order API errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict:
        return {"message": self.message}


class ValidationError(OrderError):
    """Raised when input is malformed or inconsistent. Field-tagged."""

    status_code = 422

    def __init__(self, errors: Dict[str, List[str]], message: str = "The given data was invalid."):
        self.errors = errors
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})

    def to_dict(self) -> Dict:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(OrderError):
    """Raised when an order is missing, soft-deleted or owned by someone else."""

    status_code = 404

    def __init__(self, order_id: Optional[object] = None):
        self.order_id = order_id
        super().__init__("Order not found.")


class ConflictError(OrderError):
    """Raised when a valid request is forbidden by the order's current state."""

    status_code = 422


class TransitionError(OrderError):
    """Raised when the status engine rejects a transition."""

    status_code = 422

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change status from {current} to {requested}.")

    def to_dict(self) -> Dict:
        return {"message": self.message, "errors": {"status": [self.message]}}


class AuthenticationError(OrderError):
    """Raised when a request carries no usable bearer token."""

    status_code = 401

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__("Unauthenticated.")
