import uuid
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from subscription_service.core.app_factory import create_application
from subscription_service.core.config import Settings
from subscription_service.domain.errors import SubscriptionNotFoundError
from subscription_service.domain.models import Subscription, SummaryFilter
from subscription_service.infrastructure.persistence.database import Database
from subscription_service.infrastructure.repositories.subscription_repository import (
    SQLSubscriptionRepository,
)


class InMemorySubscriptionRepository:
    """Dict-backed stand-in for the SQL repository."""

    def __init__(self) -> None:
        self.items: Dict[uuid.UUID, Subscription] = {}
        self.calls = []

    def create(self, subscription: Subscription) -> None:
        self.calls.append(("create", subscription.id))
        self.items[subscription.id] = Subscription(
            id=subscription.id,
            user_id=subscription.user_id,
            service_name=subscription.service_name,
            price=subscription.price,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
        )

    def get_by_id(self, subscription_id: uuid.UUID) -> Subscription:
        self.calls.append(("get_by_id", subscription_id))
        stored = self.items.get(subscription_id)
        if stored is None:
            raise SubscriptionNotFoundError(subscription_id)
        return Subscription(
            id=stored.id,
            user_id=stored.user_id,
            service_name=stored.service_name,
            price=stored.price,
            start_date=stored.start_date,
            end_date=stored.end_date,
        )

    def update(self, subscription: Subscription) -> None:
        self.calls.append(("update", subscription.id))
        if subscription.id not in self.items:
            raise SubscriptionNotFoundError(subscription.id)
        self.items[subscription.id] = subscription

    def delete(self, subscription_id: uuid.UUID) -> None:
        self.calls.append(("delete", subscription_id))
        if self.items.pop(subscription_id, None) is None:
            raise SubscriptionNotFoundError(subscription_id)

    def get_summary(self, summary_filter: SummaryFilter) -> int:
        self.calls.append(("get_summary", summary_filter))
        return sum(item.price for item in self.items.values())


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("DB_CONNECT_ATTEMPTS", "2")
    monkeypatch.setenv("DB_CONNECT_RETRY_DELAY", "0")
    return Settings()


@pytest.fixture
def database(settings):
    db = Database.from_settings(settings)
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def repository(database) -> SQLSubscriptionRepository:
    return SQLSubscriptionRepository(database.engine)


@pytest.fixture
def fake_repository() -> InMemorySubscriptionRepository:
    return InMemorySubscriptionRepository()


@pytest.fixture
def client(settings, database):
    app = create_application(settings, database)
    with TestClient(app) as test_client:
        yield test_client
