"""Salary and credit collaborator services backed by injected lookup tables."""

from loan_eligibility.mocks.credit_service import create_credit_app
from loan_eligibility.mocks.data import DEFAULT_CREDIT_RECORDS, DEFAULT_SALARY_RECORDS
from loan_eligibility.mocks.salary_service import create_salary_app

__all__ = [
    "DEFAULT_CREDIT_RECORDS",
    "DEFAULT_SALARY_RECORDS",
    "create_credit_app",
    "create_salary_app",
]
