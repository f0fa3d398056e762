"""API router configuration."""

from fastapi import APIRouter

from loan_eligibility.api.endpoints import health, loans

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    health.router,
    tags=["health"],
)

api_router.include_router(
    loans.router,
    tags=["loans"],
)
