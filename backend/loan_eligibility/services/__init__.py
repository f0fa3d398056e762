"""Business logic services."""

from loan_eligibility.services.amortization import amortized_monthly_payment
from loan_eligibility.services.eligibility_service import EligibilityService
from loan_eligibility.services.upstream_client import UpstreamClient

__all__ = ["EligibilityService", "UpstreamClient", "amortized_monthly_payment"]
