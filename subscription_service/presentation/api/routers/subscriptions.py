"""API router for subscription CRUD and the total-price summary."""

import uuid

from fastapi import APIRouter, Depends, Response, status

from ....core.dependencies import get_subscription_service
from ....domain.models import SummaryFilter
from ....services.subscription_service import SubscriptionService
from ..dependencies import parse_summary_filter
from ..schemas.subscription_schemas import (
    CreateSubscriptionRequest,
    SubscriptionResponse,
    SummaryResponse,
    UpdateSubscriptionRequest,
)

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
def create_subscription(
    payload: CreateSubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    subscription = service.create(
        user_id=payload.user_id,
        service_name=payload.service_name,
        price=payload.price,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return SubscriptionResponse.from_entity(subscription)


# Declared before /{subscription_id} so "summary" is not parsed as an id.
@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    summary_filter: SummaryFilter = Depends(parse_summary_filter),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SummaryResponse:
    """Total price of the subscriptions matching every provided filter."""
    return SummaryResponse(total_price=service.get_summary(summary_filter))


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionResponse,
    response_model_exclude_none=True,
)
def get_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionResponse:
    return SubscriptionResponse.from_entity(service.get_by_id(subscription_id))


@router.put("/{subscription_id}", status_code=status.HTTP_200_OK)
def update_subscription(
    subscription_id: uuid.UUID,
    payload: UpdateSubscriptionRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    service.update(
        subscription_id,
        service_name=payload.service_name,
        price=payload.price,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: uuid.UUID,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    service.delete(subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
