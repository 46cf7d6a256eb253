"""
Health check router.

Liveness/readiness check for the site. Reports the version and whether
the product and cart store answers; a store outage answers 503 so a
load balancer can take the instance out of rotation.
"""

from fastapi import APIRouter, Depends, Response

from ninjacoders.core.config import settings
from ninjacoders.domain.storefront.ports import DataStoreGateway
from ninjacoders.interfaces.storefront.dependencies import get_data_store
from ninjacoders.interfaces.storefront.schemas import HealthResponse

router = APIRouter(tags=["health"])

HTTP_503 = 503


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the site version and the reachability of the data store.",
)
def health_check(
    response: Response,
    store: DataStoreGateway = Depends(get_data_store),
) -> HealthResponse:
    if store.ping():
        return HealthResponse(status="ok", version=settings.version, store="ok")
    response.status_code = HTTP_503
    return HealthResponse(status="degraded", version=settings.version, store="unavailable")
