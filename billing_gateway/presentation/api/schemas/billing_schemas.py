"""Pydantic schemas for the public billing endpoints."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanged with the browser in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PublicConfigResponse(CamelModel):
    """Keys the browser needs to initialise Stripe.js."""

    publishable_key: str = Field(..., description="Stripe publishable key")
    apple_pay_enabled: bool = Field(..., description="True when both Stripe keys are configured")


class ProductSummaryResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    currency: str = Field(..., description="Currency code of the active price")
    unit_amount: int = Field(..., description="Amount in the smallest currency unit")
    recurring: Optional[Dict[str, Any]] = Field(None, description="Billing schedule of the price")
    price_id: Optional[str] = Field(None, description="Stripe Price ID to subscribe to")


class PlansResponse(CamelModel):
    weekly: Optional[ProductSummaryResponse] = None
    monthly: Optional[ProductSummaryResponse] = None
    yearly: Optional[ProductSummaryResponse] = None


class ProductsResponse(CamelModel):
    plans: PlansResponse


class CreateSubscriptionRequest(CamelModel):
    """Request to subscribe a new customer to a price.

    Fields are optional here so that absent values are reported with the
    gateway's own error message instead of a schema validation error.
    """

    email: Optional[str] = Field(None, description="Customer email address")
    price_id: Optional[str] = Field(None, description="Stripe Price ID for the subscription")
    payment_method_id: Optional[str] = Field(None, description="Payment method created by Stripe.js")


class CreateSubscriptionResponse(CamelModel):
    subscription_id: str
    client_secret: Optional[str] = Field(None, description="Client secret of the first payment intent")
    status: str
