"""Rule engine foundation with evaluation context, results, and base evaluator."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from loan_eligibility.core.enums import RuleType
from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact

# Fixed decision thresholds
SALARY_TO_PAYMENT_MULTIPLE = 3
MIN_CREDIT_SCORE = 600
MAX_ACTIVE_DEFAULTS = 0
MAX_ACTIVE_LOANS = 3


@dataclass(frozen=True)
class EvaluationContext:
    """
    Evaluation context containing the facts needed to evaluate one rule.

    Attributes:
        salary: Verified salary fact
        credit: Credit bureau fact
        monthly_payment: Amortized monthly repayment for the application
        rule_type: The specific rule being evaluated
    """

    salary: SalaryFact
    credit: CreditFact
    monthly_payment: float
    rule_type: RuleType


@dataclass(frozen=True)
class EvaluationResult:
    """
    Result of evaluating a single rule.

    Attributes:
        rule_type: The rule that produced this result
        passed: Whether the rule evaluation passed
        reason: Decline reason when the rule failed, None otherwise
        evidence: Structured data showing actual vs. required values
    """

    rule_type: RuleType
    passed: bool
    reason: Optional[str] = None
    evidence: dict = field(default_factory=dict)


class RuleEvaluator(ABC):
    """
    Abstract base class for rule evaluators using the Strategy pattern.

    Each concrete evaluator implements the checks for one family of rules
    (affordability, credit history) and returns an EvaluationResult.
    """

    @abstractmethod
    def evaluate(self, context: EvaluationContext) -> EvaluationResult:
        """
        Evaluate a rule against the provided context.

        Args:
            context: EvaluationContext containing the resolved facts

        Returns:
            EvaluationResult with pass/fail, reason, and evidence

        Raises:
            ValueError: If the evaluator does not handle the context's rule type
        """
        pass

    def _unsupported(self, rule_type: RuleType) -> ValueError:
        return ValueError(
            f"{type(self).__name__} cannot handle rule type: {rule_type.value}"
        )
