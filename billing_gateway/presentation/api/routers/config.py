from fastapi import APIRouter, Depends

from ....core.dependencies import get_billing_service
from ....services.billing_service import BillingService
from ...api.schemas.billing_schemas import PublicConfigResponse

router = APIRouter(prefix="/api/config", tags=["Configuration"])


@router.get("", response_model=PublicConfigResponse)
async def get_config(
    billing_service: BillingService = Depends(get_billing_service),
) -> PublicConfigResponse:
    return PublicConfigResponse(**billing_service.public_configuration())
