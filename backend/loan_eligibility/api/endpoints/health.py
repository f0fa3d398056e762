"""Health check endpoint."""

from fastapi import APIRouter

from loan_eligibility.models.schemas.loan import HealthResponse

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Liveness probe.

    Always reports ok; upstream dependencies are not checked.
    """
    return HealthResponse(status="ok")
