"""Rule engine orchestrator for producing loan decisions."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from loan_eligibility.core.enums import DecisionStatus, RuleType
from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact
from loan_eligibility.services.rule_engine.base import (
    EvaluationContext,
    EvaluationResult,
    RuleEvaluator,
)
from loan_eligibility.services.rule_engine.evaluators import (
    AffordabilityEvaluator,
    CreditEvaluator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Decision:
    """
    Outcome of running every rule against the resolved facts.

    Attributes:
        status: APPROVED when no rule failed, DECLINED otherwise
        reasons: Decline reasons in rule declaration order
        rule_results: Individual results for every evaluated rule
    """

    status: DecisionStatus
    reasons: List[str] = field(default_factory=list)
    rule_results: List[EvaluationResult] = field(default_factory=list)

    @property
    def primary_reason(self) -> Optional[str]:
        return self.reasons[0] if self.reasons else None


class RuleEngine:
    """
    Rule engine orchestrator for the fixed decision policy.

    This class:
    - Maintains a registry of rule evaluators keyed by rule type
    - Evaluates every rule, in RuleType declaration order, without
      short-circuiting
    - Collects the reasons of failed rules in that same order
    """

    def __init__(self):
        """Initialize the rule engine with evaluator registry."""
        self._evaluators: Dict[RuleType, RuleEvaluator] = {}
        self._register_default_evaluators()

    def _register_default_evaluators(self):
        """Register default evaluators for all rule types."""
        self._evaluators[RuleType.SALARY_AFFORDABILITY] = AffordabilityEvaluator()

        credit_evaluator = CreditEvaluator()
        self._evaluators[RuleType.MIN_CREDIT_SCORE] = credit_evaluator
        self._evaluators[RuleType.NO_ACTIVE_DEFAULTS] = credit_evaluator
        self._evaluators[RuleType.MAX_ACTIVE_LOANS] = credit_evaluator

    def register_evaluator(self, rule_type: RuleType, evaluator: RuleEvaluator) -> None:
        """
        Register a custom evaluator for a specific rule type.

        Args:
            rule_type: The rule type to handle
            evaluator: The evaluator instance
        """
        self._evaluators[rule_type] = evaluator

    def decide(
        self,
        salary: SalaryFact,
        credit: CreditFact,
        monthly_payment: float,
    ) -> Decision:
        """
        Evaluate all rules against the facts.

        Args:
            salary: Verified salary fact
            credit: Credit bureau fact
            monthly_payment: Amortized monthly repayment

        Returns:
            Decision with status and ordered decline reasons

        Raises:
            ValueError: If a rule type has no registered evaluator
        """
        results: List[EvaluationResult] = []

        for rule_type in RuleType:
            evaluator = self._evaluators.get(rule_type)
            if evaluator is None:
                raise ValueError(f"No evaluator registered for rule type: {rule_type.value}")

            context = EvaluationContext(
                salary=salary,
                credit=credit,
                monthly_payment=monthly_payment,
                rule_type=rule_type,
            )
            results.append(evaluator.evaluate(context))

        reasons = [
            r.reason or f"Rule {r.rule_type.value} failed"
            for r in results
            if not r.passed
        ]
        status = DecisionStatus.DECLINED if reasons else DecisionStatus.APPROVED

        logger.debug(
            f"Evaluated {len(results)} rules for national_id={salary.national_id}: "
            f"{status.value} {reasons}"
        )

        return Decision(status=status, reasons=reasons, rule_results=results)
