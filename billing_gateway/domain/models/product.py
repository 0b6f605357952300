"""Catalog shapes returned by the processor and the plan summaries built from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_CURRENCY = "usd"


@dataclass(frozen=True, slots=True)
class PlanQuery:
    """Catalog identifiers for the three plans shown on the pricing page."""

    weekly: Optional[str] = None
    monthly: Optional[str] = None
    yearly: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.weekly) and bool(self.monthly) and bool(self.yearly)


@dataclass(frozen=True, slots=True)
class CatalogItem:
    id: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CatalogPrice:
    id: str
    currency: Optional[str] = None
    unit_amount: Optional[int] = None
    recurring: Optional[Dict[str, Any]] = None


@dataclass(frozen=True, slots=True)
class ProductSummary:
    """
    Pricing-page view of a catalog item and its most recent active price.

    Attributes:
        id: Catalog item identifier
        name: Display name
        description: Optional marketing description
        currency: Price currency, ``usd`` when the item has no active price
        unit_amount: Amount in the smallest currency unit, ``0`` without a price
        recurring: Billing schedule of the price, ``None`` for one-off or missing prices
        price_id: Identifier of the price, ``None`` without a price
    """

    id: str
    name: str
    description: Optional[str]
    currency: str
    unit_amount: int
    recurring: Optional[Dict[str, Any]]
    price_id: Optional[str]

    @classmethod
    def compose(cls, item: CatalogItem, price: Optional[CatalogPrice]) -> "ProductSummary":
        if price is None:
            return cls(
                id=item.id,
                name=item.name,
                description=item.description,
                currency=DEFAULT_CURRENCY,
                unit_amount=0,
                recurring=None,
                price_id=None,
            )
        return cls(
            id=item.id,
            name=item.name,
            description=item.description,
            currency=price.currency or DEFAULT_CURRENCY,
            unit_amount=price.unit_amount or 0,
            recurring=price.recurring or None,
            price_id=price.id or None,
        )
