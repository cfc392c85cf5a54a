import uuid
from datetime import date

import pytest
from sqlalchemy import text

from subscription_service.domain.errors import PersistenceError, SubscriptionNotFoundError
from subscription_service.domain.models import Subscription, SummaryFilter


def _subscription(user_id=None, service_name="Netflix", price=599, start=date(2024, 1, 1), end=None):
    return Subscription(
        id=uuid.uuid4(),
        user_id=user_id or uuid.uuid4(),
        service_name=service_name,
        price=price,
        start_date=start,
        end_date=end,
    )


def test_create_then_get_returns_equal_entity(repository):
    sub = _subscription(end=date(2024, 12, 31))
    repository.create(sub)

    assert repository.get_by_id(sub.id) == sub


def test_open_ended_subscription_keeps_null_end_date(repository):
    sub = _subscription()
    repository.create(sub)

    assert repository.get_by_id(sub.id).end_date is None


def test_get_missing_raises_not_found(repository):
    missing = uuid.uuid4()
    with pytest.raises(SubscriptionNotFoundError) as excinfo:
        repository.get_by_id(missing)
    assert excinfo.value.subscription_id == missing


def test_duplicate_id_raises_persistence_error(repository):
    sub = _subscription()
    repository.create(sub)

    with pytest.raises(PersistenceError) as excinfo:
        repository.create(sub)
    assert excinfo.value.operation == "SubscriptionRepository.create"
    assert excinfo.value.__cause__ is not None


def test_non_positive_price_violates_check_constraint(repository):
    with pytest.raises(PersistenceError):
        repository.create(_subscription(price=0))


def test_update_replaces_mutable_fields(repository):
    sub = _subscription()
    repository.create(sub)

    sub.service_name = "Netflix Premium"
    sub.price = 999
    sub.end_date = date(2025, 1, 1)
    repository.update(sub)

    stored = repository.get_by_id(sub.id)
    assert stored.service_name == "Netflix Premium"
    assert stored.price == 999
    assert stored.end_date == date(2025, 1, 1)
    assert stored.user_id == sub.user_id


def test_update_missing_raises_not_found_and_writes_nothing(repository, database):
    repository.create(_subscription())
    ghost = _subscription()

    with pytest.raises(SubscriptionNotFoundError):
        repository.update(ghost)

    with database.engine.connect() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM subscriptions")).scalar_one()
    assert count == 1


def test_delete_removes_row(repository):
    sub = _subscription()
    repository.create(sub)

    repository.delete(sub.id)

    with pytest.raises(SubscriptionNotFoundError):
        repository.get_by_id(sub.id)


def test_delete_missing_raises_not_found(repository):
    with pytest.raises(SubscriptionNotFoundError):
        repository.delete(uuid.uuid4())


class TestSummary:
    @pytest.fixture
    def user_a(self):
        return uuid.uuid4()

    @pytest.fixture
    def user_b(self):
        return uuid.uuid4()

    @pytest.fixture(autouse=True)
    def seed(self, repository, user_a, user_b):
        repository.create(_subscription(user_a, "Netflix", 500, date(2024, 1, 1)))
        repository.create(_subscription(user_a, "Spotify", 300, date(2024, 3, 15)))
        repository.create(_subscription(user_b, "Netflix", 1000, date(2024, 6, 1)))

    def test_no_filter_sums_all_rows(self, repository):
        assert repository.get_summary(SummaryFilter()) == 1800

    def test_user_filter(self, repository, user_a):
        assert repository.get_summary(SummaryFilter(user_id=user_a)) == 800

    def test_service_name_filter(self, repository):
        assert repository.get_summary(SummaryFilter(service_name="Netflix")) == 1500

    def test_start_date_lower_bound(self, repository):
        assert repository.get_summary(SummaryFilter(start_date=date(2024, 3, 15))) == 1300

    def test_end_date_bounds_start_date(self, repository):
        # A subscription counts when it started on or before end_date,
        # regardless of its own end_date.
        assert repository.get_summary(SummaryFilter(end_date=date(2024, 3, 15))) == 800

    def test_combined_filters(self, repository, user_a):
        summary_filter = SummaryFilter(
            user_id=user_a,
            service_name="Spotify",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
        )
        assert repository.get_summary(summary_filter) == 300

    def test_no_match_returns_zero(self, repository):
        assert repository.get_summary(SummaryFilter(user_id=uuid.uuid4())) == 0


def test_summary_on_empty_table_is_zero(repository):
    assert repository.get_summary(SummaryFilter()) == 0


def test_store_failure_maps_to_persistence_error(repository, database):
    with database.engine.begin() as conn:
        conn.execute(text("DROP TABLE subscriptions"))

    with pytest.raises(PersistenceError) as excinfo:
        repository.get_summary(SummaryFilter())
    assert excinfo.value.operation == "SubscriptionRepository.get_summary"
