"""Subscription domain model: a user's recurring payment for an online service."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(slots=True)
class Subscription:
    """
    Subscription entity.

    Attributes:
        id: Unique identifier, assigned once at creation
        user_id: Owning user (opaque reference)
        service_name: Name of the subscribed service, 2-100 characters
        price: Monthly cost in minor currency units, always positive
        start_date: First day the subscription is active
        end_date: Last day of the subscription, ``None`` when open-ended
    """

    id: uuid.UUID
    user_id: uuid.UUID
    service_name: str
    price: int
    start_date: date
    end_date: Optional[date] = None

    def __repr__(self) -> str:
        return f"<Subscription id={self.id} user_id={self.user_id} service={self.service_name!r}>"


@dataclass(frozen=True, slots=True)
class SummaryFilter:
    """Conjunctive filter for the total-price aggregate. ``None`` fields are ignored."""

    user_id: Optional[uuid.UUID] = None
    service_name: Optional[str] = None
    start_date: Optional[date] = None
    # Upper bound, compared against start_date.
    end_date: Optional[date] = None
