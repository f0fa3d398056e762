"""Pytest configuration and fixtures."""

from typing import Callable, Mapping, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from loan_eligibility.config import Settings, get_settings
from loan_eligibility.deps import get_http_client
from loan_eligibility.main import app
from loan_eligibility.mocks import create_credit_app, create_salary_app
from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact

SALARY_URL = "http://salary.test"
CREDIT_URL = "http://credit.test"

APPROVED_ID = "12345678"
LOW_SCORE_ID = "87654321"
DEFAULTS_ID = "99999999"
UNKNOWN_ID = "00000000"


def make_settings(**overrides) -> Settings:
    values = {
        "SALARY_API_URL": SALARY_URL,
        "CREDIT_API_URL": CREDIT_URL,
        "ANNUAL_INTEREST_PERCENT": 20.0,
        "UPSTREAM_RETRY_DELAY_SECONDS": 0.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_upstream_http_client(
    salary_records: Optional[Mapping[str, SalaryFact]] = None,
    credit_records: Optional[Mapping[str, CreditFact]] = None,
) -> httpx.AsyncClient:
    """HTTP client routing both upstream hosts to the in-process services."""
    return httpx.AsyncClient(
        mounts={
            SALARY_URL: httpx.ASGITransport(app=create_salary_app(salary_records)),
            CREDIT_URL: httpx.ASGITransport(app=create_credit_app(credit_records)),
        }
    )


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Factory for a TestClient wired to the given settings and HTTP client."""

    def _make(
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> TestClient:
        resolved_settings = settings or make_settings()
        resolved_http_client = http_client or make_upstream_http_client()
        app.dependency_overrides[get_settings] = lambda: resolved_settings
        app.dependency_overrides[get_http_client] = lambda: resolved_http_client
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client) -> TestClient:
    """Client against the seeded salary and credit services."""
    return make_client()


@pytest.fixture
def respx_client(make_client) -> TestClient:
    """Client whose upstream traffic goes through a plain (respx-mockable) HTTP client."""
    return make_client(http_client=httpx.AsyncClient())


@pytest.fixture
def application_payload() -> dict:
    return {"national_id": APPROVED_ID, "loan_amount": 50000, "term_months": 12}
