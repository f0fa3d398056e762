"""Loan application endpoint."""

import logging
from typing import Annotated, Any, Optional, Union

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from loan_eligibility.core.enums import ErrorCode
from loan_eligibility.core.exceptions import ConfigError, UpstreamUnavailableError
from loan_eligibility.deps import get_eligibility_service, get_request_id
from loan_eligibility.models.schemas.loan import (
    ErrorResponse,
    LoanApplicationRequest,
    LoanDecisionResponse,
)
from loan_eligibility.services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(
    status_code: int,
    error: ErrorCode,
    message: str,
    request_id: str,
    detail: Optional[Any] = None,
) -> JSONResponse:
    """Build a JSON error envelope."""
    body = ErrorResponse(
        error=error,
        message=message,
        detail=detail,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


@router.post(
    "/apply-loan",
    response_model=LoanDecisionResponse,
    response_model_exclude_none=True,
    summary="Apply for a loan",
    description="Verify salary and credit for an applicant and return an approval or decline",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    },
)
async def apply_loan(
    application: LoanApplicationRequest,
    request: Request,
    service: Annotated[EligibilityService, Depends(get_eligibility_service)],
    request_id: Annotated[str, Depends(get_request_id)],
) -> Union[LoanDecisionResponse, JSONResponse]:
    """
    Evaluate a loan application.

    This endpoint:
    1. Verifies the applicant's salary
    2. Checks the applicant's credit record
    3. Applies the decision rules to the amortized monthly payment

    A missing salary or credit record is a DECLINED decision. An upstream
    that cannot be reached yields a 502 error envelope instead.
    """
    try:
        return await service.evaluate(
            application,
            request_id,
            should_abandon=request.is_disconnected,
        )
    except ConfigError as e:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            e.error_code,
            e.message,
            request_id,
        )
    except UpstreamUnavailableError as e:
        return error_response(
            status.HTTP_502_BAD_GATEWAY,
            e.error_code,
            e.message,
            request_id,
            detail=e.detail,
        )
