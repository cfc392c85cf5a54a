"""Domain models for the subscription service."""

from .subscription import Subscription, SummaryFilter

__all__ = [
    "Subscription",
    "SummaryFilter",
]
