"""Credit check collaborator service."""

from typing import Mapping, Optional

from fastapi import FastAPI

from loan_eligibility.mocks.common import create_lookup_app
from loan_eligibility.mocks.data import DEFAULT_CREDIT_RECORDS
from loan_eligibility.models.schemas.loan import CreditFact


def create_credit_app(lookup: Optional[Mapping[str, CreditFact]] = None) -> FastAPI:
    """Credit bureau service answering ``POST /check-credit``."""
    return create_lookup_app(
        title="Credit Check API",
        path="/check-credit",
        lookup=DEFAULT_CREDIT_RECORDS if lookup is None else lookup,
        response_model=CreditFact,
        not_found_message="credit record not found",
    )
