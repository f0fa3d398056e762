"""Dependency injection for FastAPI endpoints."""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from loan_eligibility.config import Settings, get_settings
from loan_eligibility.services.eligibility_service import EligibilityService
from loan_eligibility.services.upstream_client import UpstreamClient

__all__ = [
    "get_eligibility_service",
    "get_http_client",
    "get_request_id",
    "get_settings",
]


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared HTTP client created in the application lifespan."""
    return request.app.state.http_client


def get_request_id(request: Request) -> str:
    """Correlation id resolved by the request id middleware."""
    return request.state.request_id


def get_eligibility_service(
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> EligibilityService:
    """
    Build the eligibility service for one request.

    The upstream client is left unset when either service URL is missing;
    the service then reports a configuration error once the application
    has been validated.
    """
    upstream = None
    if settings.upstreams_configured:
        upstream = UpstreamClient(
            http_client,
            salary_base_url=settings.SALARY_API_URL,
            credit_base_url=settings.CREDIT_API_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            retry_attempts=settings.UPSTREAM_RETRY_ATTEMPTS,
            retry_delay=settings.UPSTREAM_RETRY_DELAY_SECONDS,
        )

    return EligibilityService(
        upstream=upstream,
        annual_interest_percent=settings.ANNUAL_INTEREST_PERCENT,
    )
