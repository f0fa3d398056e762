import httpx
import respx
from fastapi.testclient import TestClient

from loan_eligibility.deps import get_eligibility_service
from loan_eligibility.main import app
from loan_eligibility.mocks import DEFAULT_SALARY_RECORDS
from loan_eligibility.models.schemas.loan import CreditFact, SalaryFact
from loan_eligibility.services.rule_engine import RuleEngine

from conftest import (
    APPROVED_ID,
    CREDIT_URL,
    DEFAULTS_ID,
    LOW_SCORE_ID,
    SALARY_URL,
    UNKNOWN_ID,
    make_settings,
    make_upstream_http_client,
)

SALARY_ENDPOINT = f"{SALARY_URL}/verify-salary"
CREDIT_ENDPOINT = f"{CREDIT_URL}/check-credit"


def payload(national_id: str = APPROVED_ID, amount: float = 50000, term: int = 12) -> dict:
    return {"national_id": national_id, "loan_amount": amount, "term_months": term}


# ==================== Health ====================


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_healthz_without_configuration(make_client):
    client = make_client(settings=make_settings(SALARY_API_URL=None, CREDIT_API_URL=None))

    assert client.get("/healthz").status_code == 200


# ==================== Decisions ====================


def test_approved_application(client, application_payload):
    response = client.post("/apply-loan", json=application_payload)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "APPROVED"
    assert body["monthly_payment"] == 4631.73
    assert body["annual_interest_percent"] == 20.0
    assert "reason" not in body
    assert "reasons" not in body
    assert body["salary"] == {"national_id": APPROVED_ID, "monthly_salary": 350000.0}
    assert body["credit"] == {
        "national_id": APPROVED_ID,
        "credit_score": 650,
        "active_defaults": 0,
        "active_loans": 2,
    }
    assert body["application"] == application_payload


def test_low_credit_score_declined_in_rule_order(client):
    response = client.post("/apply-loan", json=payload(LOW_SCORE_ID))

    body = response.json()
    expected = RuleEngine().decide(
        SalaryFact(**body["salary"]), CreditFact(**body["credit"]), body["monthly_payment"]
    )
    assert response.status_code == 200
    assert body["status"] == "DECLINED"
    assert body["reasons"] == expected.reasons
    assert body["reasons"] == ["Credit score below 600"]
    assert body["reason"] == body["reasons"][0]


def test_multiple_reasons(client):
    body = client.post("/apply-loan", json=payload(DEFAULTS_ID)).json()

    assert body["status"] == "DECLINED"
    assert body["reasons"] == ["Active defaults present", "More than 3 active loans"]
    assert body["reason"] == "Active defaults present"


def test_unaffordable_loan(client):
    body = client.post("/apply-loan", json=payload(APPROVED_ID, amount=10_000_000, term=12)).json()

    assert body["status"] == "DECLINED"
    assert body["reasons"] == ["Monthly salary is less than 3x the amortized monthly repayment"]


def test_unknown_salary_record(client):
    response = client.post("/apply-loan", json=payload(UNKNOWN_ID))

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "DECLINED"
    assert body["reasons"] == ["Salary record not found"]
    assert body["reason"] == "Salary record not found"
    assert "salary" not in body
    assert "credit" not in body
    assert body["monthly_payment"] == 4631.73
    assert body["application"]["national_id"] == UNKNOWN_ID


def test_unknown_credit_record(make_client):
    salary_records = dict(DEFAULT_SALARY_RECORDS)
    salary_records["55555555"] = SalaryFact(national_id="55555555", monthly_salary=90000)
    client = make_client(http_client=make_upstream_http_client(salary_records=salary_records))

    body = client.post("/apply-loan", json=payload("55555555")).json()

    assert body["status"] == "DECLINED"
    assert body["reasons"] == ["Credit record not found"]
    assert body["salary"] == {"national_id": "55555555", "monthly_salary": 90000.0}
    assert "credit" not in body


def test_configured_interest_rate(make_client):
    client = make_client(settings=make_settings(ANNUAL_INTEREST_PERCENT=0.0))

    body = client.post("/apply-loan", json=payload(amount=12000, term=12)).json()

    assert body["monthly_payment"] == 1000.0
    assert body["annual_interest_percent"] == 0.0


def test_same_application_twice_is_idempotent(client, application_payload):
    first = client.post("/apply-loan", json=application_payload)
    second = client.post("/apply-loan", json=application_payload)

    assert first.json() == second.json()
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


# ==================== Validation ====================


def test_invalid_fields_are_client_errors(client):
    invalid_payloads = [
        payload(national_id=""),
        payload(amount=0),
        payload(amount=-10),
        payload(term=0),
        payload(term=-1),
        {"loan_amount": 50000, "term_months": 12},
        {"national_id": APPROVED_ID},
    ]

    for body in invalid_payloads:
        response = client.post("/apply-loan", json=body)
        assert response.status_code == 400, body
        assert response.json()["error"] == "invalid_request"
        assert response.headers["X-Request-ID"]


def test_unparseable_body(client):
    response = client.post(
        "/apply-loan",
        content=b"{not json",
        headers={"Content-Type": "application/json", "X-Request-ID": "bad-body"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "invalid_request"
    assert body["request_id"] == "bad-body"


def test_method_not_allowed(client):
    assert client.get("/apply-loan").status_code == 405


def test_validation_precedes_configuration_check(make_client):
    client = make_client(settings=make_settings(SALARY_API_URL=None))

    assert client.post("/apply-loan", json=payload(amount=0)).status_code == 400


# ==================== Configuration ====================


def test_missing_upstream_urls(make_client, application_payload):
    client = make_client(settings=make_settings(CREDIT_API_URL=None))

    response = client.post(
        "/apply-loan", json=application_payload, headers={"X-Request-ID": "cfg-1"}
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "config_error",
        "message": "Service URLs not configured",
        "request_id": "cfg-1",
    }


# ==================== Infrastructure failures ====================


def test_salary_unavailable_returns_bad_gateway(respx_client, application_payload):
    with respx.mock(assert_all_called=False) as router:
        salary_route = router.post(SALARY_ENDPOINT).respond(503, text="maintenance")
        credit_route = router.post(CREDIT_ENDPOINT).respond(
            200,
            json={"national_id": APPROVED_ID, "credit_score": 650, "active_defaults": 0, "active_loans": 2},
        )

        response = respx_client.post(
            "/apply-loan", json=application_payload, headers={"X-Request-ID": "infra-1"}
        )

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "salary_service_unavailable"
    assert body["message"] == "Failed to verify salary"
    assert body["detail"] == "http error: 503 - maintenance"
    assert body["request_id"] == "infra-1"
    assert salary_route.call_count == 3
    assert not credit_route.called


def test_credit_unavailable_returns_bad_gateway(respx_client, application_payload):
    with respx.mock(assert_all_called=False) as router:
        router.post(SALARY_ENDPOINT).respond(
            200, json={"national_id": APPROVED_ID, "monthly_salary": 350000}
        )
        credit_route = router.post(CREDIT_ENDPOINT).mock(side_effect=httpx.ConnectError("refused"))

        response = respx_client.post("/apply-loan", json=application_payload)

    assert response.status_code == 502
    assert response.json()["error"] == "credit_service_unavailable"
    assert credit_route.call_count == 3


def test_not_found_is_not_retried(respx_client, application_payload):
    with respx.mock(assert_all_called=False) as router:
        salary_route = router.post(SALARY_ENDPOINT).respond(404, json={"error": "not_found"})

        body = respx_client.post("/apply-loan", json=application_payload).json()

    assert body["reasons"] == ["Salary record not found"]
    assert salary_route.call_count == 1


# ==================== Correlation ids ====================


def test_client_request_id_is_propagated(respx_client, application_payload):
    with respx.mock(assert_all_called=False) as router:
        salary_route = router.post(SALARY_ENDPOINT).respond(
            200, json={"national_id": APPROVED_ID, "monthly_salary": 350000}
        )
        credit_route = router.post(CREDIT_ENDPOINT).respond(
            200,
            json={"national_id": APPROVED_ID, "credit_score": 650, "active_defaults": 0, "active_loans": 2},
        )

        response = respx_client.post(
            "/apply-loan", json=application_payload, headers={"X-Request-ID": "trace-abc"}
        )

    assert response.headers["X-Request-ID"] == "trace-abc"
    assert salary_route.calls.last.request.headers["X-Request-ID"] == "trace-abc"
    assert credit_route.calls.last.request.headers["X-Request-ID"] == "trace-abc"


def test_generated_request_id(client, application_payload, monkeypatch):
    monkeypatch.setattr(app.state, "request_id_generator", lambda: "generated-1")

    response = client.post("/apply-loan", json=application_payload)

    assert response.headers["X-Request-ID"] == "generated-1"


def test_blank_request_id_is_replaced(client, application_payload):
    response = client.post("/apply-loan", json=application_payload, headers={"X-Request-ID": ""})

    assert response.headers["X-Request-ID"]


def test_out_of_range_amounts_are_client_errors(client):
    for body in [payload(term=50000), payload(amount=1e308), payload(amount=1e13)]:
        response = client.post("/apply-loan", json=body, headers={"X-Request-ID": "range-1"})
        assert response.status_code == 400, body
        assert response.headers["X-Request-ID"] == "range-1"


def test_longest_allowed_term(client):
    response = client.post("/apply-loan", json=payload(term=1200))

    assert response.status_code == 200
    assert response.json()["status"] == "APPROVED"


def test_fields_are_not_coerced(client):
    invalid_payloads = [
        payload(term="12"),
        payload(term=12.0),
        payload(amount="50000"),
        {"national_id": 12345678, "loan_amount": 50000, "term_months": 12},
    ]

    for body in invalid_payloads:
        response = client.post("/apply-loan", json=body)
        assert response.status_code == 400, body


# ==================== Unexpected failures ====================


class FailingService:
    async def evaluate(self, *args, **kwargs):
        raise RuntimeError("boom")


def test_unexpected_error_keeps_request_id(make_client, application_payload):
    make_client()
    app.dependency_overrides[get_eligibility_service] = lambda: FailingService()
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post(
        "/apply-loan", json=application_payload, headers={"X-Request-ID": "trace-1"}
    )

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "trace-1"
    assert response.json() == {
        "error": "internal_error",
        "message": "Internal server error",
        "request_id": "trace-1",
    }
