"""Rule evaluators for the decision rule families."""

from .affordability_evaluator import AffordabilityEvaluator
from .credit_evaluator import CreditEvaluator

__all__ = [
    "AffordabilityEvaluator",
    "CreditEvaluator",
]
