from dataclasses import dataclass

from ..services.billing_service import BillingService
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    billing_service: BillingService
