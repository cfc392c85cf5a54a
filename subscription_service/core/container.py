from dataclasses import dataclass

from .config import Settings
from ..infrastructure.persistence.database import Database
from ..services.subscription_service import SubscriptionService


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    database: Database
    subscription_service: SubscriptionService
