"""Credit history rule evaluator for score, defaults and open loans."""

from loan_eligibility.core.enums import RuleType
from loan_eligibility.services.rule_engine.base import (
    MAX_ACTIVE_DEFAULTS,
    MAX_ACTIVE_LOANS,
    MIN_CREDIT_SCORE,
    EvaluationContext,
    EvaluationResult,
    RuleEvaluator,
)

CREDIT_SCORE_REASON = "Credit score below 600"
ACTIVE_DEFAULTS_REASON = "Active defaults present"
ACTIVE_LOANS_REASON = "More than 3 active loans"


class CreditEvaluator(RuleEvaluator):
    """
    Evaluator for credit-related rules.

    Handles:
    - MIN_CREDIT_SCORE: score must be at least 600
    - NO_ACTIVE_DEFAULTS: no active defaults allowed
    - MAX_ACTIVE_LOANS: at most 3 active loans
    """

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        """
        Evaluate credit-related rules against the credit fact.

        Args:
            context: EvaluationContext containing the credit fact

        Returns:
            EvaluationResult with pass/fail, reason, and evidence

        Raises:
            ValueError: If rule type is not credit-related
        """
        credit = context.credit

        # Route to appropriate check based on rule type
        if context.rule_type == RuleType.MIN_CREDIT_SCORE:
            return self._result(
                context,
                passed=credit.credit_score >= MIN_CREDIT_SCORE,
                reason=CREDIT_SCORE_REASON,
                actual=credit.credit_score,
                required=MIN_CREDIT_SCORE,
            )
        elif context.rule_type == RuleType.NO_ACTIVE_DEFAULTS:
            return self._result(
                context,
                passed=credit.active_defaults <= MAX_ACTIVE_DEFAULTS,
                reason=ACTIVE_DEFAULTS_REASON,
                actual=credit.active_defaults,
                required=MAX_ACTIVE_DEFAULTS,
            )
        elif context.rule_type == RuleType.MAX_ACTIVE_LOANS:
            return self._result(
                context,
                passed=credit.active_loans <= MAX_ACTIVE_LOANS,
                reason=ACTIVE_LOANS_REASON,
                actual=credit.active_loans,
                required=MAX_ACTIVE_LOANS,
            )
        else:
            raise self._unsupported(context.rule_type)

    @staticmethod
    def _result(
        context: EvaluationContext,
        passed: bool,
        reason: str,
        actual: int,
        required: int,
    ) -> EvaluationResult:
        return EvaluationResult(
            rule_type=context.rule_type,
            passed=passed,
            reason=None if passed else reason,
            evidence={"actual": actual, "required": required},
        )
