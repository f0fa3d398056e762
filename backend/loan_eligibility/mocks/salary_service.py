"""Salary verification collaborator service."""

from typing import Mapping, Optional

from fastapi import FastAPI

from loan_eligibility.mocks.common import create_lookup_app
from loan_eligibility.mocks.data import DEFAULT_SALARY_RECORDS
from loan_eligibility.models.schemas.loan import SalaryFact


def create_salary_app(lookup: Optional[Mapping[str, SalaryFact]] = None) -> FastAPI:
    """Salary service answering ``POST /verify-salary``."""
    return create_lookup_app(
        title="Salary Verification API",
        path="/verify-salary",
        lookup=DEFAULT_SALARY_RECORDS if lookup is None else lookup,
        response_model=SalaryFact,
        not_found_message="salary record not found",
    )
