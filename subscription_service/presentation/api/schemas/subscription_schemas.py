"""Pydantic schemas for subscription API endpoints."""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ....domain.models import Subscription

# Largest value the INTEGER price column holds.
MAX_PRICE = 2_147_483_647


def _coerce_date(value: Any) -> Any:
    """Accept ``YYYY-MM-DD`` as well as full RFC 3339 timestamps."""
    if isinstance(value, str) and len(value) > 10:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class UpdateSubscriptionRequest(BaseModel):
    """Request schema for replacing a subscription's mutable fields."""

    service_name: str = Field(..., min_length=2, max_length=100)
    price: int = Field(..., gt=0, le=MAX_PRICE, strict=True)
    start_date: date
    end_date: Optional[date] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        return _coerce_date(value)


class CreateSubscriptionRequest(UpdateSubscriptionRequest):
    """Request schema for creating a subscription."""

    user_id: UUID


class SubscriptionResponse(BaseModel):
    """Response schema for subscription data."""

    id: UUID
    user_id: UUID
    service_name: str
    price: int
    start_date: date
    end_date: Optional[date] = None

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResponse":
        return cls(
            id=subscription.id,
            user_id=subscription.user_id,
            service_name=subscription.service_name,
            price=subscription.price,
            start_date=subscription.start_date,
            end_date=subscription.end_date,
        )


class SummaryResponse(BaseModel):
    """Response schema for the total-price aggregate."""

    total_price: int
