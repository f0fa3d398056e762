"""Seed records for the collaborator services."""

from types import MappingProxyType
from typing import Mapping

from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact

DEFAULT_SALARY_RECORDS: Mapping[str, SalaryFact] = MappingProxyType(
    {
        "12345678": SalaryFact(national_id="12345678", monthly_salary=350000),
        "87654321": SalaryFact(national_id="87654321", monthly_salary=120000),
        "99999999": SalaryFact(national_id="99999999", monthly_salary=500000),
    }
)

DEFAULT_CREDIT_RECORDS: Mapping[str, CreditFact] = MappingProxyType(
    {
        "12345678": CreditFact(
            national_id="12345678", credit_score=650, active_defaults=0, active_loans=2
        ),
        "87654321": CreditFact(
            national_id="87654321", credit_score=540, active_defaults=0, active_loans=1
        ),
        "99999999": CreditFact(
            national_id="99999999", credit_score=720, active_defaults=1, active_loans=4
        ),
    }
)
