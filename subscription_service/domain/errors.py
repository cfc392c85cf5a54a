"""Domain-level error kinds shared by the repository, service and API layers."""

from __future__ import annotations

import uuid
from typing import Optional


class SubscriptionError(Exception):
    """Base class for subscription domain errors."""


class SubscriptionNotFoundError(SubscriptionError):
    """No subscription exists with the requested identifier."""

    def __init__(self, subscription_id: uuid.UUID) -> None:
        super().__init__(f"Subscription {subscription_id} not found")
        self.subscription_id = subscription_id


class PersistenceError(SubscriptionError):
    """The relational store failed (connectivity, constraint, driver error)."""

    def __init__(self, operation: str, message: Optional[str] = None) -> None:
        super().__init__(f"{operation}: {message}" if message else operation)
        self.operation = operation


class InvalidFilterError(ValueError):
    """A summary query parameter could not be parsed."""
