"""Stripe implementation of the payment processor port."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import stripe

from ..domain.errors import ExternalProcessorError
from ..domain.models import CatalogItem, CatalogPrice, CustomerRecord, SubscriptionRecord

logger = logging.getLogger(__name__)


class StripeGateway:
    """Talks to the Stripe API with credentials fixed at construction time.

    Credentials are passed with every request instead of through the module-level
    ``stripe.api_key`` so several gateways (and test doubles) can coexist.
    """

    NOT_CONFIGURED_MESSAGE = "Stripe not configured. Please set API keys first."

    def __init__(self, secret_key: str, api_version: str) -> None:
        self._secret_key = secret_key
        self._api_version = api_version
        if not secret_key:
            logger.warning(
                "STRIPE_SECRET_KEY is not set; Stripe-backed endpoints will fail until it is configured."
            )

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def _request_options(self) -> Dict[str, Any]:
        if not self._secret_key:
            raise ExternalProcessorError(self.NOT_CONFIGURED_MESSAGE)
        return {"api_key": self._secret_key, "stripe_version": self._api_version}

    @contextmanager
    def _stripe_call(self, operation: str) -> Iterator[None]:
        try:
            yield
        except stripe.StripeError as exc:
            message = exc.user_message or str(exc)
            logger.info("Stripe %s failed: %s", operation, message)
            raise ExternalProcessorError(message) from exc

    # ============ CATALOG ============

    def retrieve_product(self, product_id: str) -> CatalogItem:
        """Retrieve a Stripe product by id."""
        options = self._request_options()
        with self._stripe_call("product retrieval"):
            product = stripe.Product.retrieve(product_id, **options)
        return CatalogItem(
            id=product.id,
            name=product.name,
            description=getattr(product, "description", None),
        )

    def list_active_prices(self, product_id: str, limit: int = 1) -> List[CatalogPrice]:
        """List the active prices of a product, most recent first."""
        options = self._request_options()
        with self._stripe_call("price listing"):
            prices = stripe.Price.list(product=product_id, active=True, limit=limit, **options)
        return [self._to_price(price) for price in prices.data]

    @staticmethod
    def _to_price(price: Any) -> CatalogPrice:
        recurring = getattr(price, "recurring", None)
        return CatalogPrice(
            id=price.id,
            currency=getattr(price, "currency", None),
            unit_amount=getattr(price, "unit_amount", None),
            recurring=recurring.to_dict() if recurring else None,
        )

    # ============ CUSTOMERS ============

    def find_customer(self, email: str) -> Optional[CustomerRecord]:
        """Find an existing customer by email."""
        options = self._request_options()
        with self._stripe_call("customer lookup"):
            customers = stripe.Customer.list(email=email, limit=1, **options)
        if not customers.data:
            return None
        customer = customers.data[0]
        return CustomerRecord(id=customer.id, email=getattr(customer, "email", None))

    def create_customer(self, email: str) -> CustomerRecord:
        """Create a new Stripe customer."""
        options = self._request_options()
        with self._stripe_call("customer creation"):
            customer = stripe.Customer.create(email=email, **options)
        return CustomerRecord(id=customer.id, email=getattr(customer, "email", None))

    def attach_payment_method(self, payment_method_id: str, customer_id: str) -> None:
        """Attach a payment method to a customer."""
        options = self._request_options()
        with self._stripe_call("payment method attach"):
            stripe.PaymentMethod.attach(payment_method_id, customer=customer_id, **options)

    def set_default_payment_method(self, customer_id: str, payment_method_id: str) -> None:
        """Use a payment method for the customer's future invoices."""
        options = self._request_options()
        with self._stripe_call("customer update"):
            stripe.Customer.modify(
                customer_id,
                invoice_settings={"default_payment_method": payment_method_id},
                **options,
            )

    # ============ SUBSCRIPTIONS ============

    def create_subscription(self, customer_id: str, price_id: str) -> SubscriptionRecord:
        """Create an incomplete subscription with its first payment intent expanded."""
        options = self._request_options()
        with self._stripe_call("subscription creation"):
            subscription = stripe.Subscription.create(
                customer=customer_id,
                items=[{"price": price_id}],
                payment_behavior="default_incomplete",
                expand=["latest_invoice.payment_intent"],
                **options,
            )

        invoice = getattr(subscription, "latest_invoice", None)
        payment_intent = getattr(invoice, "payment_intent", None) if invoice else None
        # Unexpanded references come back as plain id strings.
        if isinstance(payment_intent, str):
            payment_intent = None

        return SubscriptionRecord(
            id=subscription.id,
            status=subscription.status,
            client_secret=getattr(payment_intent, "client_secret", None) if payment_intent else None,
            payment_status=getattr(payment_intent, "status", None) if payment_intent else None,
        )
