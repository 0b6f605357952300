"""Subscription request/result shapes and the processor records behind them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class SubscriptionRequest:
    email: Optional[str] = None
    price_id: Optional[str] = None
    payment_method_id: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.email) and bool(self.price_id) and bool(self.payment_method_id)


@dataclass(frozen=True, slots=True)
class CustomerRecord:
    id: str
    email: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SubscriptionRecord:
    """
    Subscription as created by the processor.

    ``client_secret`` and ``payment_status`` come from the payment intent of the
    latest invoice and are ``None`` when the processor returned no intent.
    """

    id: str
    status: str
    client_secret: Optional[str] = None
    payment_status: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SubscriptionResult:
    subscription_id: str
    client_secret: Optional[str]
    status: str

    @classmethod
    def from_record(cls, record: SubscriptionRecord) -> "SubscriptionResult":
        return cls(
            subscription_id=record.id,
            client_secret=record.client_secret,
            status=record.payment_status or record.status,
        )
