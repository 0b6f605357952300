from typing import Optional

from fastapi import APIRouter, Body, Depends

from ....core.dependencies import get_billing_service
from ....domain.models import SubscriptionRequest
from ....services.billing_service import BillingService
from ...api.schemas.billing_schemas import CreateSubscriptionRequest, CreateSubscriptionResponse

router = APIRouter(prefix="/api", tags=["Subscriptions"])


@router.post("/create-subscription", response_model=CreateSubscriptionResponse)
async def create_subscription(
    payload: Optional[CreateSubscriptionRequest] = Body(None),
    billing_service: BillingService = Depends(get_billing_service),
) -> CreateSubscriptionResponse:
    """Create a customer, attach the card and start an incomplete subscription."""
    payload = payload or CreateSubscriptionRequest()
    result = await billing_service.create_subscription(
        SubscriptionRequest(
            email=payload.email,
            price_id=payload.price_id,
            payment_method_id=payload.payment_method_id,
        )
    )
    return CreateSubscriptionResponse(
        subscription_id=result.subscription_id,
        client_secret=result.client_secret,
        status=result.status,
    )
