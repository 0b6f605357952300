"""Domain models for the billing gateway."""

from .product import CatalogItem, CatalogPrice, PlanQuery, ProductSummary
from .subscription import (
    CustomerRecord,
    SubscriptionRecord,
    SubscriptionRequest,
    SubscriptionResult,
)

__all__ = [
    "CatalogItem",
    "CatalogPrice",
    "CustomerRecord",
    "PlanQuery",
    "ProductSummary",
    "SubscriptionRecord",
    "SubscriptionRequest",
    "SubscriptionResult",
]
