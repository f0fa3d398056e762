"""Pydantic schemas for API validation and serialization."""

from loan_eligibility.models.schemas.loan import (
    CreditFact,
    ErrorResponse,
    HealthResponse,
    LoanApplicationRequest,
    LoanDecisionResponse,
    NationalIdRequest,
    SalaryFact,
)

__all__ = [
    # Application schemas
    "LoanApplicationRequest",
    # Upstream schemas
    "NationalIdRequest",
    "SalaryFact",
    "CreditFact",
    # Decision schemas
    "LoanDecisionResponse",
    # Error schemas
    "ErrorResponse",
    "HealthResponse",
]
