"""Plan lookup and subscription flows backed by the payment processor."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ..core.config import Settings
from ..domain.errors import AggregationFailure, ExternalProcessorError, MissingParameter
from ..domain.models import (
    CustomerRecord,
    PlanQuery,
    ProductSummary,
    SubscriptionRequest,
    SubscriptionResult,
)
from ..domain.ports.payment_processor import PaymentProcessor

logger = logging.getLogger(__name__)

MISSING_PRODUCT_IDS = "Missing product IDs"
MISSING_SUBSCRIPTION_FIELDS = "Missing email, priceId or paymentMethodId"


class BillingService:
    """Validates gateway requests and drives the processor on their behalf."""

    def __init__(self, processor: PaymentProcessor, settings: Settings) -> None:
        self._processor = processor
        self._settings = settings

    def public_configuration(self) -> Dict[str, Any]:
        return {
            "publishable_key": self._settings.stripe_publishable_key,
            "apple_pay_enabled": self._settings.apple_pay_enabled,
        }

    # ============ PRODUCTS ============

    async def resolve_product(self, product_id: Optional[str]) -> Optional[ProductSummary]:
        """Summarise one catalog item, or return ``None`` when it cannot be loaded.

        Lookup failures of any kind are absorbed so a single missing or archived
        product does not hide the other plans.
        """
        if not product_id:
            return None
        try:
            item = await asyncio.to_thread(self._processor.retrieve_product, product_id)
            prices = await asyncio.to_thread(self._processor.list_active_prices, product_id, 1)
            return ProductSummary.compose(item, prices[0] if prices else None)
        except Exception as exc:
            logger.debug("Product %s could not be resolved: %s", product_id, exc)
            return None

    async def load_plans(self, query: PlanQuery) -> Dict[str, Optional[ProductSummary]]:
        if not query.is_complete():
            raise MissingParameter(MISSING_PRODUCT_IDS)

        try:
            weekly, monthly, yearly = await asyncio.gather(
                self.resolve_product(query.weekly),
                self.resolve_product(query.monthly),
                self.resolve_product(query.yearly),
            )
        except Exception as exc:
            logger.exception("Failed to aggregate product lookups")
            raise AggregationFailure("Failed to load products") from exc

        return {"weekly": weekly, "monthly": monthly, "yearly": yearly}

    # ============ SUBSCRIPTIONS ============

    async def create_subscription(self, request: SubscriptionRequest) -> SubscriptionResult:
        if not request.is_complete():
            raise MissingParameter(MISSING_SUBSCRIPTION_FIELDS)
        return await asyncio.to_thread(self._subscribe, request)

    def _subscribe(self, request: SubscriptionRequest) -> SubscriptionResult:
        customer: Optional[CustomerRecord] = None
        created_customer = False
        try:
            if self._settings.stripe_reuse_customers:
                customer = self._processor.find_customer(request.email)
            if customer is None:
                customer = self._processor.create_customer(request.email)
                created_customer = True

            self._processor.attach_payment_method(request.payment_method_id, customer.id)
            self._processor.set_default_payment_method(customer.id, request.payment_method_id)
            record = self._processor.create_subscription(customer.id, request.price_id)
        except ExternalProcessorError:
            self._report_orphan(customer, created_customer)
            raise
        except Exception as exc:
            self._report_orphan(customer, created_customer)
            logger.error("Failed to create subscription: %s", exc)
            raise ExternalProcessorError(str(exc)) from exc

        logger.info("Subscription %s created for customer %s", record.id, customer.id)
        return SubscriptionResult.from_record(record)

    @staticmethod
    def _report_orphan(customer: Optional[CustomerRecord], created_customer: bool) -> None:
        if customer is not None and created_customer:
            logger.warning(
                "Subscription flow aborted after creating customer %s; the customer was left in place",
                customer.id,
            )
