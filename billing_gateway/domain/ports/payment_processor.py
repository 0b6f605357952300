from __future__ import annotations

from typing import List, Optional, Protocol

from ..models import CatalogItem, CatalogPrice, CustomerRecord, SubscriptionRecord


class CatalogGateway(Protocol):
    """Read access to the processor's product catalog."""

    def retrieve_product(self, product_id: str) -> CatalogItem:
        ...

    def list_active_prices(self, product_id: str, limit: int = 1) -> List[CatalogPrice]:
        ...


class SubscriptionGateway(Protocol):
    """Customer and subscription operations on the processor."""

    def find_customer(self, email: str) -> Optional[CustomerRecord]:
        ...

    def create_customer(self, email: str) -> CustomerRecord:
        ...

    def attach_payment_method(self, payment_method_id: str, customer_id: str) -> None:
        ...

    def set_default_payment_method(self, customer_id: str, payment_method_id: str) -> None:
        ...

    def create_subscription(self, customer_id: str, price_id: str) -> SubscriptionRecord:
        ...


class PaymentProcessor(CatalogGateway, SubscriptionGateway, Protocol):
    """Aggregate protocol implemented by processor adapters."""

    @property
    def is_configured(self) -> bool:
        ...
