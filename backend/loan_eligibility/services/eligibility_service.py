"""Eligibility service orchestrating upstream verification and the decision."""

import logging
from typing import List, Optional

from loan_eligibility.core.enums import (
    DecisionStatus,
    EligibilityState,
    UpstreamDependency,
    UpstreamOutcome,
)
from loan_eligibility.core.exceptions import ConfigError, UpstreamUnavailableError
from loan_eligibility.models.schemas.loan import (
    CreditFact,
    LoanApplicationRequest,
    LoanDecisionResponse,
    SalaryFact,
)
from loan_eligibility.services.amortization import amortized_monthly_payment
from loan_eligibility.services.retry import AbandonCheck, UpstreamResult
from loan_eligibility.services.rule_engine import RuleEngine
from loan_eligibility.services.upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

SALARY_NOT_FOUND_REASON = "Salary record not found"
CREDIT_NOT_FOUND_REASON = "Credit record not found"


class EligibilityService:
    """
    Eligibility service to orchestrate a single loan decision.

    This service:
    - Computes the amortized monthly payment for the application
    - Verifies salary, then checks credit, strictly in that order
    - Converts a not-found answer into a DECLINED decision carrying only
      the facts resolved so far
    - Raises UpstreamUnavailableError when a dependency cannot be reached
    - Runs the rule engine once both facts are known

    A salary failure never triggers a credit call.
    """

    def __init__(
        self,
        upstream: Optional[UpstreamClient],
        annual_interest_percent: float,
        rule_engine: Optional[RuleEngine] = None,
    ):
        """
        Initialize the eligibility service.

        Args:
            upstream: Upstream client, or None when the upstream URLs are
                not configured
            annual_interest_percent: Annual rate used for the payment
            rule_engine: Decision rule engine (defaults to the fixed policy)
        """
        self.upstream = upstream
        self.annual_interest_percent = annual_interest_percent
        self.rule_engine = rule_engine or RuleEngine()

    async def evaluate(
        self,
        application: LoanApplicationRequest,
        request_id: str,
        should_abandon: Optional[AbandonCheck] = None,
    ) -> LoanDecisionResponse:
        """
        Evaluate a validated loan application.

        Args:
            application: The validated application
            request_id: Correlation id propagated to upstream calls
            should_abandon: Optional check for a disconnected caller

        Returns:
            LoanDecisionResponse with APPROVED or DECLINED status

        Raises:
            ConfigError: If the upstream services are not configured
            UpstreamUnavailableError: If salary or credit could not be verified
        """
        self._enter(request_id, EligibilityState.VALIDATED)

        if self.upstream is None:
            logger.error(f"req_id={request_id} upstream service URLs not configured")
            raise ConfigError()

        monthly_payment = amortized_monthly_payment(
            application.loan_amount,
            application.term_months,
            self.annual_interest_percent,
        )

        # Salary
        self._enter(request_id, EligibilityState.SALARY_PENDING)
        salary_result = await self.upstream.verify_salary(
            application.national_id, request_id, should_abandon
        )
        salary = self._resolve(
            request_id, UpstreamDependency.SALARY, salary_result
        )
        if salary is None:
            return self._partial_decline(
                request_id,
                application,
                monthly_payment,
                SALARY_NOT_FOUND_REASON,
            )
        self._enter(request_id, EligibilityState.SALARY_RESOLVED)

        # Credit
        self._enter(request_id, EligibilityState.CREDIT_PENDING)
        credit_result = await self.upstream.check_credit(
            application.national_id, request_id, should_abandon
        )
        credit = self._resolve(
            request_id, UpstreamDependency.CREDIT, credit_result
        )
        if credit is None:
            return self._partial_decline(
                request_id,
                application,
                monthly_payment,
                CREDIT_NOT_FOUND_REASON,
                salary=salary,
            )
        self._enter(request_id, EligibilityState.CREDIT_RESOLVED)

        decision = self.rule_engine.decide(salary, credit, monthly_payment)
        self._enter(request_id, EligibilityState.DECIDED)

        if decision.status == DecisionStatus.DECLINED:
            logger.info(
                f"req_id={request_id} declined id={application.national_id} "
                f"reasons={decision.reasons} monthly={monthly_payment}"
            )
        else:
            logger.info(
                f"req_id={request_id} approved id={application.national_id} "
                f"monthly={monthly_payment}"
            )

        return self._build_response(
            request_id,
            application,
            decision.status,
            decision.reasons,
            monthly_payment,
            salary=salary,
            credit=credit,
        )

    def _resolve(self, request_id: str, dependency: UpstreamDependency, result: UpstreamResult):
        """Return the fact, None for not-found, or raise when unavailable."""
        if result.outcome == UpstreamOutcome.SUCCESS:
            return result.value

        if result.outcome == UpstreamOutcome.NOT_FOUND:
            logger.info(
                f"req_id={request_id} {dependency.value} record not found"
            )
            self._enter(request_id, EligibilityState.PARTIAL_DECLINE)
            return None

        logger.error(
            f"req_id={request_id} {dependency.value} service unavailable after "
            f"{result.attempts} attempt(s): {result.detail}"
        )
        self._enter(request_id, EligibilityState.INFRASTRUCTURE_ERROR)
        raise UpstreamUnavailableError(dependency, result.detail)

    def _partial_decline(
        self,
        request_id: str,
        application: LoanApplicationRequest,
        monthly_payment: float,
        reason: str,
        salary: Optional[SalaryFact] = None,
    ) -> LoanDecisionResponse:
        return self._build_response(
            request_id,
            application,
            DecisionStatus.DECLINED,
            [reason],
            monthly_payment,
            salary=salary,
        )

    def _build_response(
        self,
        request_id: str,
        application: LoanApplicationRequest,
        status: DecisionStatus,
        reasons: List[str],
        monthly_payment: float,
        salary: Optional[SalaryFact] = None,
        credit: Optional[CreditFact] = None,
    ) -> LoanDecisionResponse:
        response = LoanDecisionResponse(
            status=status,
            reason=reasons[0] if reasons else None,
            reasons=list(reasons) if reasons else None,
            monthly_payment=monthly_payment,
            annual_interest_percent=self.annual_interest_percent,
            salary=salary,
            credit=credit,
            application=application,
        )
        self._enter(request_id, EligibilityState.RESPONDED)
        return response

    @staticmethod
    def _enter(request_id: str, state: EligibilityState) -> None:
        logger.debug(f"req_id={request_id} state={state.value}")
