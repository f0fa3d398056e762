"""Rule engine for deciding loan applications from salary and credit facts."""

from .base import EvaluationContext, EvaluationResult, RuleEvaluator
from .engine import Decision, RuleEngine

__all__ = [
    "Decision",
    "EvaluationContext",
    "EvaluationResult",
    "RuleEngine",
    "RuleEvaluator",
]
