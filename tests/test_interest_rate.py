"""Unit tests for the interest-rate adapter."""

import json

import httpx
import pytest

from core.config import DEFAULT_INTEREST_RATE_URL
from core.interest_rate import (
    build_interest_rate_request,
    calculate_interest_rate,
    duration_in_years,
    normalize_interest_rate,
)
from core.models import InterestRateRequest

VALID_ARGUMENTS = {
    "product": "BUDGET",
    "repaymentType": "ANNUITAIR",
    "discounts": [{"type": "BANK_ACCOUNT"}],
    "includeInactive": False,
}


@pytest.fixture
def request_model():
    return InterestRateRequest.model_validate(VALID_ARGUMENTS)


# -----------------------------------------------------------------------------
# Request building
# -----------------------------------------------------------------------------
def test_build_request_body_has_exactly_three_keys(request_model):
    """Test that include_inactive never appears in the request body."""
    upstream_request = build_interest_rate_request(request_model)

    assert upstream_request.method == "POST"
    assert upstream_request.url == DEFAULT_INTEREST_RATE_URL
    assert upstream_request.json == {
        "product": "BUDGET",
        "repaymentType": "ANNUITAIR",
        "discounts": [{"type": "BANK_ACCOUNT"}],
    }
    assert upstream_request.headers == {"Content-Type": "application/json"}


def test_build_request_inactive_flag_goes_to_query():
    request = InterestRateRequest.model_validate({**VALID_ARGUMENTS, "includeInactive": True})

    upstream_request = build_interest_rate_request(request)

    assert upstream_request.params == {"inactive": "true"}
    assert set(upstream_request.json) == {"product", "repaymentType", "discounts"}


def test_build_request_without_inactive_has_no_query(request_model):
    assert build_interest_rate_request(request_model).params == {}


def test_build_request_serializes_sustainability_label():
    request = InterestRateRequest.model_validate(
        {
            "product": "WONING",
            "repaymentType": "LINEAIR",
            "discounts": [
                {"type": "SUSTAINABILITY", "label": "B"},
                {"type": "BANK_ACCOUNT"},
            ],
        }
    )

    body = build_interest_rate_request(request).json

    assert body["discounts"] == [
        {"type": "SUSTAINABILITY", "label": "B"},
        {"type": "BANK_ACCOUNT"},
    ]


def test_build_request_honours_endpoint_override(monkeypatch, request_model):
    monkeypatch.setenv("ABN_AMRO_INTEREST_RATE_URL", "http://localhost:9999/calculate")

    assert build_interest_rate_request(request_model).url == "http://localhost:9999/calculate"


# -----------------------------------------------------------------------------
# Normalization
# -----------------------------------------------------------------------------
@pytest.mark.parametrize(
    "months, years",
    [(120, 10.0), (125, 10.4), (360, 30.0), (3, 0.3), (6, 0.5), (0, 0.0)],
)
def test_duration_in_years(months, years):
    """Test one-decimal half-up rounding of the duration."""
    assert duration_in_years(months) == years


@pytest.mark.parametrize("duration", [None, "120", True])
def test_duration_in_years_without_number(duration):
    assert duration_in_years(duration) is None


def test_normalize_maps_provider_fields(interest_rate_payload, request_model):
    data = normalize_interest_rate(interest_rate_payload, request_model).to_data()

    assert data["bridgingCredit"] == {
        "rate": 3.5,
        "rateSheetDate": "2024-01-15",
        "options": [],
    }
    assert data["periods"] == [
        {
            "duration": 120,
            "durationInYears": 10.0,
            "inactive": False,
            "type": "VAST",
            "reflectionPeriod": 14,
            "rates": {
                "dutchNationalMortgageGuarantee": 3.2,
                "lifeTimeValue": [
                    {"range": "80-90%", "rate": 3.5},
                    {"range": "90-100%", "rate": 3.8},
                ],
            },
        }
    ]
    assert data["interestRate"] == 3.2
    assert data["effectiveRate"] == 3.25
    assert data["baseRate"] == 3.0
    assert data["appliedDiscounts"] == ["BANK_ACCOUNT"]
    assert data["calculationDate"] == "2024-01-15T10:00:00Z"
    assert data["requestParameters"] == VALID_ARGUMENTS


def test_normalize_keeps_only_first_nhg_rate(request_model):
    """Test that duplicate NHG entries collapse to the first one."""
    payload = {
        "periods": [
            {
                "duration": 60,
                "rates": [
                    {"type": "LTV", "ltv": "0-60%", "value": 3.1},
                    {"type": "NHG", "value": 2.9},
                    {"type": "NHG", "value": 2.5},
                ],
            }
        ]
    }

    data = normalize_interest_rate(payload, request_model).to_data()

    rates = data["periods"][0]["rates"]
    assert rates["dutchNationalMortgageGuarantee"] == 2.9
    assert rates["lifeTimeValue"] == [{"range": "0-60%", "rate": 3.1}]


def test_normalize_missing_periods_gives_empty_list(request_model):
    data = normalize_interest_rate({}, request_model).to_data()

    assert data["periods"] == []
    assert data["bridgingCredit"] == {"rate": None, "rateSheetDate": None, "options": None}


def test_normalize_null_periods_gives_empty_list(request_model):
    data = normalize_interest_rate({"periods": None}, request_model).to_data()

    assert data["periods"] == []


def test_normalize_omits_absent_legacy_fields(request_model):
    data = normalize_interest_rate({"periods": []}, request_model).to_data()

    for name in ("interestRate", "effectiveRate", "baseRate", "appliedDiscounts", "calculationDate"):
        assert name not in data


def test_normalize_period_without_rates(request_model):
    data = normalize_interest_rate({"periods": [{"duration": 12}]}, request_model).to_data()

    period = data["periods"][0]
    assert period["durationInYears"] == 1.0
    assert period["rates"] == {"dutchNationalMortgageGuarantee": None, "lifeTimeValue": []}


# -----------------------------------------------------------------------------
# End-to-end through a mocked upstream
# -----------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_calculate_interest_rate_success(upstream, sent_requests, interest_rate_payload):
    async with upstream(json_body=interest_rate_payload) as client:
        result = await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert result.success is True
    assert result.error is None
    assert len(sent_requests) == 1

    sent = sent_requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == DEFAULT_INTEREST_RATE_URL
    assert sent.headers["content-type"] == "application/json"
    assert json.loads(sent.content) == {
        "product": "BUDGET",
        "repaymentType": "ANNUITAIR",
        "discounts": [{"type": "BANK_ACCOUNT"}],
    }

    assert result.data["bridgingCredit"]["rate"] == 3.5
    assert len(result.data["periods"]) == 1
    assert result.data["periods"][0]["durationInYears"] == 10
    assert result.data["requestParameters"] == VALID_ARGUMENTS


@pytest.mark.asyncio
async def test_calculate_interest_rate_inactive_in_url(upstream, sent_requests):
    async with upstream(json_body={"periods": []}) as client:
        result = await calculate_interest_rate(
            {**VALID_ARGUMENTS, "includeInactive": True}, client=client
        )

    assert result.success is True
    assert str(sent_requests[0].url) == f"{DEFAULT_INTEREST_RATE_URL}?inactive=true"
    assert "includeInactive" not in json.loads(sent_requests[0].content)
    assert result.data["requestParameters"]["includeInactive"] is True


@pytest.mark.asyncio
async def test_calculate_interest_rate_no_inactive_param(upstream, sent_requests):
    async with upstream(json_body={"periods": []}) as client:
        await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert "inactive" not in sent_requests[0].url.params


@pytest.mark.asyncio
async def test_calculate_interest_rate_echoes_defaults(upstream):
    async with upstream(json_body={}) as client:
        result = await calculate_interest_rate(
            {"product": "BUDGET", "type": "ANNUITAIR"}, client=client
        )

    assert result.data["requestParameters"] == {
        "product": "BUDGET",
        "repaymentType": "ANNUITAIR",
        "discounts": [],
        "includeInactive": False,
    }


@pytest.mark.asyncio
async def test_calculate_interest_rate_http_error(upstream):
    """Test that a non-2xx response is wrapped with its status code."""
    async with upstream(status_code=503, text="Service Unavailable") as client:
        result = await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert result.success is False
    assert result.data is None
    assert result.error == (
        "Failed to calculate interest rate: ABN AMRO API error (503): Service Unavailable"
    )


@pytest.mark.asyncio
async def test_calculate_interest_rate_transport_error(upstream):
    async with upstream(exc=httpx.ConnectError("connection refused")) as client:
        result = await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert result.success is False
    assert result.error.startswith("Failed to calculate interest rate: Could not reach")
    assert "connection refused" in result.error


@pytest.mark.asyncio
async def test_calculate_interest_rate_invalid_json(upstream):
    async with upstream(text="<html>maintenance</html>") as client:
        result = await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert result.success is False
    assert "Invalid JSON" in result.error


@pytest.mark.asyncio
async def test_calculate_interest_rate_non_object_json(upstream):
    async with upstream(json_body=[1, 2, 3]) as client:
        result = await calculate_interest_rate(VALID_ARGUMENTS, client=client)

    assert result.success is False
    assert "Expected a JSON object" in result.error


@pytest.mark.asyncio
async def test_calculate_interest_rate_validation_happens_before_io(upstream, sent_requests):
    """Test that invalid arguments never reach the network."""
    async with upstream(json_body={}) as client:
        result = await calculate_interest_rate(
            {"product": "BUDGET", "repaymentType": "BULLET"}, client=client
        )

    assert result.success is False
    assert result.error.startswith("Failed to calculate interest rate: ")
    assert sent_requests == []
