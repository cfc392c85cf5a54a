"""Repository for Subscription persistence."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Connection, Engine, Row, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from ...domain.errors import PersistenceError, SubscriptionNotFoundError
from ...domain.models import Subscription, SummaryFilter
from ..persistence.database import subscriptions
from ..persistence.query_builder import SummaryQueryBuilder

logger = logging.getLogger(__name__)


class SQLSubscriptionRepository:
    """Repository for managing Subscription entities in a SQL store.

    Each call checks a connection out of the engine's pool inside
    ``engine.begin()``, so it is committed (or rolled back) and returned to
    the pool however the call ends.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Connection]:
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise PersistenceError(operation, str(exc)) from exc

    def create(self, subscription: Subscription) -> None:
        """Insert a new subscription row."""
        stmt = insert(subscriptions).values(
            id=subscription.id,
            user_id=subscription.user_id,
            service_name=subscription.service_name,
            price=subscription.price,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
        )
        with self._transaction("SubscriptionRepository.create") as conn:
            conn.execute(stmt)

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        """Get subscription by ID."""
        stmt = select(subscriptions).where(subscriptions.c.id == subscription_id)
        with self._transaction("SubscriptionRepository.get_by_id") as conn:
            row = conn.execute(stmt).first()

        if row is None:
            raise SubscriptionNotFoundError(subscription_id)

        return self._row_to_subscription(row)

    def update(self, subscription: Subscription) -> None:
        """Replace the mutable fields of an existing subscription."""
        stmt = (
            update(subscriptions)
            .where(subscriptions.c.id == subscription.id)
            .values(
                service_name=subscription.service_name,
                price=subscription.price,
                start_date=subscription.start_date,
                end_date=subscription.end_date,
            )
        )
        with self._transaction("SubscriptionRepository.update") as conn:
            result = conn.execute(stmt)

        if result.rowcount == 0:
            raise SubscriptionNotFoundError(subscription.id)

    def delete(self, subscription_id: uuid.UUID) -> None:
        """Delete a subscription."""
        stmt = delete(subscriptions).where(subscriptions.c.id == subscription_id)
        with self._transaction("SubscriptionRepository.delete") as conn:
            result = conn.execute(stmt)

        if result.rowcount == 0:
            raise SubscriptionNotFoundError(subscription_id)

    def get_summary(self, summary_filter: SummaryFilter) -> int:
        """Sum ``price`` over the rows matching every provided filter field.

        The ``end_date`` bound is applied to ``start_date``: it selects
        subscriptions that started on or before that day.
        """
        builder = (
            SummaryQueryBuilder(subscriptions)
            .where_equal("user_id", summary_filter.user_id)
            .where_equal("service_name", summary_filter.service_name)
            .where_at_least("start_date", summary_filter.start_date)
            .where_at_most("start_date", summary_filter.end_date)
        )
        logger.debug("Summary query params=%s", builder.parameters())
        stmt = builder.build()
        with self._transaction("SubscriptionRepository.get_summary") as conn:
            total = conn.execute(stmt).scalar_one()

        return int(total or 0)

    def _row_to_subscription(self, row: Row) -> Subscription:
        """Convert database row to Subscription entity."""
        return Subscription(
            id=row.id,
            user_id=row.user_id,
            service_name=row.service_name,
            price=row.price,
            start_date=row.start_date,
            end_date=row.end_date,
        )
