"""Pydantic schemas for loan applications, upstream facts, and decisions."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from loan_eligibility.core.enums import DecisionStatus, ErrorCode


# ==================== Application Schemas ====================

MAX_LOAN_AMOUNT = 1_000_000_000_000
MAX_TERM_MONTHS = 1200


class LoanApplicationRequest(BaseModel):
    """Inbound loan application. Echoed back unchanged in the decision."""

    national_id: str = Field(..., min_length=1, strict=True, description="Opaque national identifier")
    loan_amount: float = Field(
        ..., gt=0, le=MAX_LOAN_AMOUNT, strict=True, allow_inf_nan=False, description="Requested principal"
    )
    term_months: int = Field(
        ..., gt=0, le=MAX_TERM_MONTHS, strict=True, description="Loan term in months"
    )

    model_config = ConfigDict(frozen=True)


# ==================== Upstream Fact Schemas ====================


class NationalIdRequest(BaseModel):
    """Request body sent to the salary and credit services."""

    national_id: str = Field(..., min_length=1)


class SalaryFact(BaseModel):
    """Salary verification result."""

    national_id: str
    monthly_salary: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class CreditFact(BaseModel):
    """Credit bureau check result."""

    national_id: str
    credit_score: int
    active_defaults: int = Field(..., ge=0)
    active_loans: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


# ==================== Decision Schemas ====================


class LoanDecisionResponse(BaseModel):
    """
    Business outcome of a loan application.

    ``reason`` duplicates the first entry of ``reasons`` and both are omitted
    on approval. ``salary`` and ``credit`` carry only the facts resolved
    before the decision was reached.
    """

    status: DecisionStatus
    reason: Optional[str] = None
    reasons: Optional[list[str]] = None
    monthly_payment: float
    annual_interest_percent: float
    salary: Optional[SalaryFact] = None
    credit: Optional[CreditFact] = None
    application: LoanApplicationRequest


# ==================== Error Schemas ====================


class ErrorResponse(BaseModel):
    """Error envelope for configuration, validation and infrastructure failures."""

    error: ErrorCode
    message: str
    detail: Optional[Any] = None
    request_id: str


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = "ok"
