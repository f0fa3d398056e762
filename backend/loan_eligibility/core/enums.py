"""Core enums for type safety across the application."""

from enum import Enum


class DecisionStatus(str, Enum):
    """Final business outcome of a loan application."""

    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


class UpstreamDependency(str, Enum):
    """Upstream verification services consulted for a decision."""

    SALARY = "salary"
    CREDIT = "credit"


class UpstreamOutcome(str, Enum):
    """Classification of a single upstream call."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


class RuleType(str, Enum):
    """Decision rules, declared in evaluation order."""

    SALARY_AFFORDABILITY = "salary_affordability"
    MIN_CREDIT_SCORE = "min_credit_score"
    NO_ACTIVE_DEFAULTS = "no_active_defaults"
    MAX_ACTIVE_LOANS = "max_active_loans"


class EligibilityState(str, Enum):
    """Orchestration states for a single loan application."""

    RECEIVED = "Received"
    VALIDATED = "Validated"
    SALARY_PENDING = "SalaryPending"
    SALARY_RESOLVED = "SalaryResolved"
    CREDIT_PENDING = "CreditPending"
    CREDIT_RESOLVED = "CreditResolved"
    DECIDED = "Decided"
    RESPONDED = "Responded"

    # Terminal early exits
    REJECTED_INPUT = "RejectedInput"
    PARTIAL_DECLINE = "PartialDecline"
    INFRASTRUCTURE_ERROR = "InfrastructureError"


class ErrorCode(str, Enum):
    """Error codes returned in error envelopes."""

    INVALID_REQUEST = "invalid_request"
    CONFIG_ERROR = "config_error"
    SALARY_SERVICE_UNAVAILABLE = "salary_service_unavailable"
    CREDIT_SERVICE_UNAVAILABLE = "credit_service_unavailable"
    INTERNAL_ERROR = "internal_error"
