"""Shared wiring for the collaborator service apps."""

from typing import Mapping, Optional, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from loan_eligibility.core.request_id import REQUEST_ID_HEADER
from loan_eligibility.models.schemas.loan import NationalIdRequest

FactT = TypeVar("FactT", bound=BaseModel)


def create_lookup_app(
    title: str,
    path: str,
    lookup: Mapping[str, FactT],
    response_model: type,
    not_found_message: str,
) -> FastAPI:
    """
    Build a lookup service answering ``POST {path}`` from ``lookup``.

    Unknown identities answer 404, malformed bodies 400. The inbound
    ``X-Request-ID`` header is echoed on every response.
    """
    app = FastAPI(title=title)

    @app.middleware("http")
    async def echo_request_id(request: Request, call_next):
        response = await call_next(request)
        request_id = request.headers.get(REQUEST_ID_HEADER)
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "invalid_body",
                "message": 'expected {"national_id":"..."}',
            },
        )

    @app.post(path, response_model=response_model)
    async def lookup_record(body: NationalIdRequest):
        record: Optional[FactT] = lookup.get(body.national_id)
        if record is None:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": "not_found", "message": not_found_message},
            )
        return record

    @app.get("/healthz")
    async def health_check() -> dict:
        return {"status": "ok"}

    return app
