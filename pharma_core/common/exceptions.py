# pharma_core/common/exceptions.py
from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when business rules block an action on otherwise valid input.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class NotFoundError(NotFound):
    default_code = "not_found"


class InvalidStateError(ConflictError):
    """
    Operation attempted on an entity that is not in the required state
    (e.g. completing an already COMPLETED redistribution).
    """
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"


class InsufficientStockError(ConflictError):
    """
    Raised when stock cannot cover a quantity.

    `reason` tells the two failure shapes apart:
      - "aggregate":     the site does not hold enough across all lots
      - "no_single_lot": the site holds enough in total, but no one lot covers it
    Both surface as the same error code.
    """
    default_detail = "Insufficient stock."
    default_code = "insufficient_stock"

    AGGREGATE = "aggregate"
    NO_SINGLE_LOT = "no_single_lot"
    LOT = "lot"

    def __init__(self, detail=None, *, reason: str = AGGREGATE, available: int | None = None, requested: int | None = None):
        super().__init__(detail=detail)
        self.reason = reason
        self.available = available
        self.requested = requested
