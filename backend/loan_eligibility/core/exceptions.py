"""Exception taxonomy for the eligibility flow."""

from loan_eligibility.core.enums import ErrorCode, UpstreamDependency


class EligibilityError(Exception):
    """Base class for errors raised while evaluating an application."""

    error_code: ErrorCode


class ConfigError(EligibilityError):
    """Required upstream locations are not configured."""

    error_code = ErrorCode.CONFIG_ERROR

    def __init__(self, message: str = "Service URLs not configured"):
        super().__init__(message)
        self.message = message


class UpstreamNotFoundError(EligibilityError):
    """An upstream service authoritatively reported no record for the identity."""

    def __init__(self, dependency: UpstreamDependency, detail: str = ""):
        super().__init__(f"{dependency.value} record not found")
        self.dependency = dependency
        self.detail = detail


class UpstreamUnavailableError(EligibilityError):
    """An upstream service could not be reached after all retry attempts."""

    _MESSAGES = {
        UpstreamDependency.SALARY: "Failed to verify salary",
        UpstreamDependency.CREDIT: "Failed to verify credit",
    }

    def __init__(self, dependency: UpstreamDependency, detail: str = ""):
        self.dependency = dependency
        self.detail = detail
        self.message = self._MESSAGES[dependency]
        super().__init__(f"{self.message}: {detail}" if detail else self.message)

    @property
    def error_code(self) -> ErrorCode:
        if self.dependency == UpstreamDependency.SALARY:
            return ErrorCode.SALARY_SERVICE_UNAVAILABLE
        return ErrorCode.CREDIT_SERVICE_UNAVAILABLE
