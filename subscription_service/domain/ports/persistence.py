from __future__ import annotations

import uuid
from typing import Protocol

from ..models import Subscription, SummaryFilter


class SubscriptionRepository(Protocol):
    """Abstract storage for subscription records.

    Implementations raise ``SubscriptionNotFoundError`` when a lookup, update
    or delete matches no row and ``PersistenceError`` for any store failure.
    """

    def create(self, subscription: Subscription) -> None:
        ...

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        ...

    def update(self, subscription: Subscription) -> None:
        ...

    def delete(self, subscription_id: uuid.UUID) -> None:
        ...

    def get_summary(self, summary_filter: SummaryFilter) -> int:
        ...
