"""Service for subscription management."""

import logging
import uuid
from datetime import date
from typing import Optional

from ..domain.errors import PersistenceError
from ..domain.models import Subscription, SummaryFilter
from ..domain.ports.persistence import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Service for managing user subscriptions.

    Input is expected to be validated by the API layer; the service mints
    identifiers and coordinates repository calls.
    """

    def __init__(self, subscription_repository: SubscriptionRepository):
        self.subscription_repository = subscription_repository

    def create(
        self,
        user_id: uuid.UUID,
        service_name: str,
        price: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> Subscription:
        """
        Create a subscription with a freshly generated identifier.

        Args:
            user_id: Owning user ID
            service_name: Name of the subscribed service
            price: Monthly price in minor currency units
            start_date: First active day
            end_date: Optional last day

        Returns:
            The persisted Subscription entity

        Raises:
            PersistenceError: If the store rejects the insert
        """
        subscription = Subscription(
            id=uuid.uuid4(),
            user_id=user_id,
            service_name=service_name,
            price=price,
            start_date=start_date,
            end_date=end_date,
        )

        try:
            self.subscription_repository.create(subscription)
        except PersistenceError as exc:
            raise PersistenceError(
                "SubscriptionService.create",
                f"failed to create subscription for user {user_id}",
            ) from exc

        logger.info("Subscription created id=%s user_id=%s", subscription.id, user_id)
        return subscription

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        """
        Get a subscription by ID.

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID
        """
        return self.subscription_repository.get_by_id(subscription_id)

    def update(
        self,
        subscription_id: uuid.UUID,
        service_name: str,
        price: int,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> Subscription:
        """
        Replace the mutable fields of a subscription.

        ``id`` and ``user_id`` are kept from the stored record. The record is
        read first so a missing ID fails before the write is composed.

        Returns:
            The updated Subscription entity

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID
        """
        subscription = self.subscription_repository.get_by_id(subscription_id)

        subscription.service_name = service_name
        subscription.price = price
        subscription.start_date = start_date
        subscription.end_date = end_date

        self.subscription_repository.update(subscription)
        return subscription

    def delete(self, subscription_id: uuid.UUID) -> None:
        """
        Delete a subscription.

        Raises:
            SubscriptionNotFoundError: If no subscription has this ID
        """
        self.subscription_repository.delete(subscription_id)
        logger.info("Subscription deleted id=%s", subscription_id)

    def get_summary(self, summary_filter: SummaryFilter) -> int:
        """Total price of the subscriptions matching the filter, 0 when none do."""
        return self.subscription_repository.get_summary(summary_filter)
