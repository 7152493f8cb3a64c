"""Order lifecycle: ownership-scoped storage and the status state machine."""

from .errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    OrderError,
    TransitionError,
    ValidationError,
)
from .services.auth import AuthUser, TokenDecoder
from .services.order_service import OrderService

__all__ = [
    "AuthUser",
    "AuthenticationError",
    "ConflictError",
    "NotFoundError",
    "OrderError",
    "OrderService",
    "TokenDecoder",
    "TransitionError",
    "ValidationError",
]
