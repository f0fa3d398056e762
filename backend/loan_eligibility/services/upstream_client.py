"""Client for the salary verification and credit check services."""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from loan_eligibility.core.enums import UpstreamDependency
from loan_eligibility.core.request_id import REQUEST_ID_HEADER
from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact
from loan_eligibility.services.retry import AbandonCheck, UpstreamResult, call_with_retry

logger = logging.getLogger(__name__)

FactT = TypeVar("FactT", bound=BaseModel)

# Upstream error bodies are echoed into failure details; keep them short.
MAX_DETAIL_BODY = 200


class UpstreamClient:
    """
    Issues correlated requests to the salary and credit services.

    Every call posts ``{"national_id": ...}`` with the correlation id in the
    ``X-Request-ID`` header and classifies the response:

    - 2xx with a valid body: SUCCESS
    - 404: NOT_FOUND (never retried)
    - anything else, including transport errors, timeouts and malformed
      bodies: UNAVAILABLE (retried up to ``retry_attempts`` in total)

    The client holds no per-call state. The underlying ``httpx.AsyncClient``
    is shared across requests and owns the connection pool.
    """

    SALARY_PATH = "/verify-salary"
    CREDIT_PATH = "/check-credit"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        salary_base_url: str,
        credit_base_url: str,
        timeout: float = 5.0,
        retry_attempts: int = 3,
        retry_delay: float = 0.25,
    ):
        """
        Initialize the upstream client.

        Args:
            http_client: Shared async HTTP client
            salary_base_url: Base URL of the salary service
            credit_base_url: Base URL of the credit service
            timeout: Per-attempt timeout in seconds
            retry_attempts: Total attempts for unavailable outcomes
            retry_delay: Fixed delay between attempts in seconds
        """
        self.http_client = http_client
        self.salary_base_url = salary_base_url.rstrip("/")
        self.credit_base_url = credit_base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    async def verify_salary(
        self,
        national_id: str,
        request_id: str,
        should_abandon: Optional[AbandonCheck] = None,
    ) -> UpstreamResult[SalaryFact]:
        """Verify the monthly salary for an identity."""
        return await self._call(
            UpstreamDependency.SALARY,
            self.salary_base_url + self.SALARY_PATH,
            national_id,
            request_id,
            SalaryFact,
            should_abandon,
        )

    async def check_credit(
        self,
        national_id: str,
        request_id: str,
        should_abandon: Optional[AbandonCheck] = None,
    ) -> UpstreamResult[CreditFact]:
        """Fetch the credit bureau record for an identity."""
        return await self._call(
            UpstreamDependency.CREDIT,
            self.credit_base_url + self.CREDIT_PATH,
            national_id,
            request_id,
            CreditFact,
            should_abandon,
        )

    async def _call(
        self,
        dependency: UpstreamDependency,
        url: str,
        national_id: str,
        request_id: str,
        model: Type[FactT],
        should_abandon: Optional[AbandonCheck],
    ) -> UpstreamResult[FactT]:
        logger.info(
            f"req_id={request_id} calling {dependency.value} {url} national_id={national_id}"
        )

        async def attempt() -> UpstreamResult[FactT]:
            return await self._post(url, national_id, request_id, model)

        return await call_with_retry(
            attempt,
            attempts=self.retry_attempts,
            delay=self.retry_delay,
            should_abandon=should_abandon,
            label=f"req_id={request_id} {dependency.value}",
        )

    async def _post(
        self,
        url: str,
        national_id: str,
        request_id: str,
        model: Type[FactT],
    ) -> UpstreamResult[FactT]:
        """Perform a single attempt and classify its outcome."""
        try:
            response = await self.http_client.post(
                url,
                json={"national_id": national_id},
                headers={REQUEST_ID_HEADER: request_id},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            return UpstreamResult.unavailable(f"timeout: {e}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return UpstreamResult.unavailable(f"{type(e).__name__}: {e}")

        if response.status_code == httpx.codes.NOT_FOUND:
            return UpstreamResult.not_found(_body_excerpt(response))

        if not response.is_success:
            return UpstreamResult.unavailable(
                f"http error: {response.status_code} - {_body_excerpt(response)}"
            )

        try:
            fact = model.model_validate_json(response.content)
        except ValidationError as e:
            return UpstreamResult.unavailable(
                f"malformed response body: {e.error_count()} validation error(s)"
            )

        return UpstreamResult.success(fact)


def _body_excerpt(response: httpx.Response) -> str:
    return response.text.strip()[:MAX_DETAIL_BODY]
