"""Health check endpoint."""

from fastapi import APIRouter

from rbac_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse, summary="Health check")
def get_health() -> HealthResponse:
    """Return server health status. Used by load balancers and monitoring."""
    return HealthResponse()
