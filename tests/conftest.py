from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from billing_gateway.core.app_factory import create_application
from billing_gateway.core.config import Settings
from billing_gateway.domain.errors import ExternalProcessorError
from billing_gateway.domain.models import (
    CatalogItem,
    CatalogPrice,
    CustomerRecord,
    SubscriptionRecord,
)


class FakePaymentProcessor:
    """In-memory processor that records every call it receives."""

    is_configured = True

    def __init__(self) -> None:
        self.products: Dict[str, CatalogItem] = {}
        self.prices: Dict[str, List[CatalogPrice]] = {}
        self.existing_customers: Dict[str, CustomerRecord] = {}
        self.failures: Dict[str, Exception] = {}
        self.subscription = SubscriptionRecord(
            id="sub_123",
            status="incomplete",
            client_secret="pi_123_secret_456",
            payment_status="requires_confirmation",
        )
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._customer_seq = 0

    def add_product(self, product_id: str, name: str, price: Optional[CatalogPrice] = None) -> None:
        self.products[product_id] = CatalogItem(id=product_id, name=name, description=f"{name} access")
        self.prices[product_id] = [price] if price else []

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def retrieve_product(self, product_id: str) -> CatalogItem:
        self._record("retrieve_product", product_id)
        if product_id not in self.products:
            raise ExternalProcessorError(f"No such product: '{product_id}'")
        return self.products[product_id]

    def list_active_prices(self, product_id: str, limit: int = 1) -> List[CatalogPrice]:
        self._record("list_active_prices", product_id, limit)
        return self.prices.get(product_id, [])[:limit]

    def find_customer(self, email: str) -> Optional[CustomerRecord]:
        self._record("find_customer", email)
        return self.existing_customers.get(email)

    def create_customer(self, email: str) -> CustomerRecord:
        self._record("create_customer", email)
        self._customer_seq += 1
        return CustomerRecord(id=f"cus_{self._customer_seq}", email=email)

    def attach_payment_method(self, payment_method_id: str, customer_id: str) -> None:
        self._record("attach_payment_method", payment_method_id, customer_id)

    def set_default_payment_method(self, customer_id: str, payment_method_id: str) -> None:
        self._record("set_default_payment_method", customer_id, payment_method_id)

    def create_subscription(self, customer_id: str, price_id: str) -> SubscriptionRecord:
        self._record("create_subscription", customer_id, price_id)
        return self.subscription


class SlowCatalogProcessor(FakePaymentProcessor):
    """Catalog lookups that block like a slow network round trip."""

    delay = 0.3

    def retrieve_product(self, product_id: str) -> CatalogItem:
        time.sleep(self.delay)
        return super().retrieve_product(product_id)


WEEKLY_PRICE = CatalogPrice(
    id="price_week",
    currency="eur",
    unit_amount=499,
    recurring={"interval": "week", "interval_count": 1},
)
MONTHLY_PRICE = CatalogPrice(
    id="price_month",
    currency="eur",
    unit_amount=1499,
    recurring={"interval": "month", "interval_count": 1},
)
YEARLY_PRICE = CatalogPrice(
    id="price_year",
    currency="eur",
    unit_amount=9999,
    recurring={"interval": "year", "interval_count": 1},
)


@pytest.fixture
def settings() -> Settings:
    return Settings(stripe_publishable_key="pk_test_123", stripe_secret_key="sk_test_123")


@pytest.fixture
def processor() -> FakePaymentProcessor:
    fake = FakePaymentProcessor()
    fake.add_product("prod_week", "Weekly", WEEKLY_PRICE)
    fake.add_product("prod_month", "Monthly", MONTHLY_PRICE)
    fake.add_product("prod_year", "Yearly", YEARLY_PRICE)
    return fake


@pytest.fixture
def client(settings: Settings, processor: FakePaymentProcessor):
    app = create_application(settings=settings, processor=processor)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def slow_processor() -> SlowCatalogProcessor:
    fake = SlowCatalogProcessor()
    fake.add_product("prod_week", "Weekly", WEEKLY_PRICE)
    fake.add_product("prod_month", "Monthly", MONTHLY_PRICE)
    fake.add_product("prod_year", "Yearly", YEARLY_PRICE)
    return fake
