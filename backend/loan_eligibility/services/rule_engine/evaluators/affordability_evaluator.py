"""Affordability rule evaluator comparing salary with the repayment."""

from loan_eligibility.core.enums import RuleType
from loan_eligibility.services.rule_engine.base import (
    SALARY_TO_PAYMENT_MULTIPLE,
    EvaluationContext,
    EvaluationResult,
    RuleEvaluator,
)

SALARY_REASON = "Monthly salary is less than 3x the amortized monthly repayment"


class AffordabilityEvaluator(RuleEvaluator):
    """
    Evaluator for the salary affordability rule.

    Handles:
    - SALARY_AFFORDABILITY: monthly salary must be at least 3x the payment
    """

    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        if context.rule_type != RuleType.SALARY_AFFORDABILITY:
            raise self._unsupported(context.rule_type)

        monthly_salary = context.salary.monthly_salary
        required = SALARY_TO_PAYMENT_MULTIPLE * context.monthly_payment
        passed = not monthly_salary < required

        return EvaluationResult(
            rule_type=context.rule_type,
            passed=passed,
            reason=None if passed else SALARY_REASON,
            evidence={
                "actual": monthly_salary,
                "required": required,
                "monthly_payment": context.monthly_payment,
            },
        )
