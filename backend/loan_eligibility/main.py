"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError

from loan_eligibility.api.endpoints.loans import error_response
from loan_eligibility.api.router import api_router
from loan_eligibility.config import get_settings
from loan_eligibility.core.enums import ErrorCode
from loan_eligibility.core.request_id import (
    REQUEST_ID_HEADER,
    generate_request_id,
    resolve_request_id,
)

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the connection pool shared by all upstream calls."""
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )
    logger.info("Eligibility API started")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("Eligibility API stopped")


# Create FastAPI application
app = FastAPI(
    title="Loan Eligibility API",
    description="API for deciding loan applications from salary and credit verification",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.request_id_generator = generate_request_id


@app.middleware("http")
async def correlate_request(request: Request, call_next):
    """Attach the correlation id to the request state and the response."""
    request_id = resolve_request_id(
        request.headers.get(REQUEST_ID_HEADER),
        request.app.state.request_id_generator,
    )
    request.state.request_id = request_id
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"req_id={request_id} unhandled error: {str(e)}", exc_info=True)
        response = error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorCode.INTERNAL_ERROR,
            "Internal server error",
            request_id,
        )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed or invalid applications as a 400 client error."""
    request_id = getattr(request.state, "request_id", "")
    logger.info(f"req_id={request_id} invalid request: {exc.errors()}")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorCode.INVALID_REQUEST,
        "Missing or invalid fields",
        request_id,
        detail=jsonable_encoder(exc.errors()),
    )


# Include API router
app.include_router(api_router)
