"""Plan lookup endpoint used by the pricing page."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ....core.dependencies import get_billing_service
from ....domain.models import PlanQuery, ProductSummary
from ....services.billing_service import BillingService
from ...api.schemas.billing_schemas import PlansResponse, ProductSummaryResponse, ProductsResponse

router = APIRouter(prefix="/api/products", tags=["Products"])


def _to_response(summary: Optional[ProductSummary]) -> Optional[ProductSummaryResponse]:
    if summary is None:
        return None
    return ProductSummaryResponse(**asdict(summary))


@router.get("", response_model=ProductsResponse)
async def get_products(
    weekly: Optional[str] = Query(None, description="Product ID of the weekly plan"),
    monthly: Optional[str] = Query(None, description="Product ID of the monthly plan"),
    yearly: Optional[str] = Query(None, description="Product ID of the yearly plan"),
    billing_service: BillingService = Depends(get_billing_service),
) -> ProductsResponse:
    """Resolve the three plan products; unresolvable plans come back as null."""
    plans = await billing_service.load_plans(PlanQuery(weekly=weekly, monthly=monthly, yearly=yearly))
    return ProductsResponse(
        plans=PlansResponse(
            weekly=_to_response(plans["weekly"]),
            monthly=_to_response(plans["monthly"]),
            yearly=_to_response(plans["yearly"]),
        )
    )
