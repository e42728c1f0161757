from __future__ import annotations

from decimal import Decimal
from typing import Any


class DealerError(Exception):
    """Base class for failures of a single requested operation."""


class NotFound(DealerError):
    def __init__(self, message: str, *, collection: str | None = None, record_id: Any | None = None) -> None:
        super().__init__(message)
        self.collection = collection
        self.record_id = record_id


class InvalidState(DealerError):
    def __init__(self, message: str, *, record_id: Any | None = None, state: str | None = None) -> None:
        super().__init__(message)
        self.record_id = record_id
        self.state = state


class InvalidAmount(DealerError):
    def __init__(self, message: str, *, amount: Decimal | None = None) -> None:
        super().__init__(message)
        self.amount = amount


class Forbidden(DealerError):
    def __init__(self, message: str, *, role: str | None = None, permission: str | None = None) -> None:
        super().__init__(message)
        self.role = role
        self.permission = permission


class Conflict(DealerError):
    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class InvariantViolation(DealerError):
    def __init__(self, message: str, *, org_id: Any | None = None) -> None:
        super().__init__(message)
        self.org_id = org_id


__all__ = [
    "Conflict",
    "DealerError",
    "Forbidden",
    "InvalidAmount",
    "InvalidState",
    "InvariantViolation",
    "NotFound",
]
