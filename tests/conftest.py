"""Pytest configuration and shared fixtures.

The ABN AMRO services are simulated with ``httpx.MockTransport``.  Every
outgoing request is recorded so tests can assert on the exact URL, headers
and body that would have gone over the wire.
"""

import httpx
import pytest


@pytest.fixture(autouse=True)
def default_endpoints(monkeypatch):
    """Make sure endpoint overrides from the developer's shell don't leak in."""
    monkeypatch.delenv("ABN_AMRO_INTEREST_RATE_URL", raising=False)
    monkeypatch.delenv("ABN_AMRO_MAXIMUM_MORTGAGE_URL", raising=False)


@pytest.fixture
def sent_requests():
    """List that collects every httpx.Request the mock upstream receives."""
    return []


@pytest.fixture
def upstream(sent_requests):
    """Factory for an AsyncClient backed by a canned upstream response.

    Args:
        status_code: HTTP status to answer with.
        json_body: Body to send as JSON (takes precedence over ``text``).
        text: Raw body text.
        exc: Exception to raise instead of answering.

    Returns:
        A function producing an ``httpx.AsyncClient``.
    """

    def _make(status_code=200, json_body=None, text="", exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            if exc is not None:
                raise exc
            if json_body is not None:
                return httpx.Response(status_code, json=json_body)
            return httpx.Response(status_code, text=text)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def interest_rate_payload():
    """A representative interest-rate response from the provider."""
    return {
        "overbruggingskrediet": 3.5,
        "renteblad": "2024-01-15",
        "overbruggingskredieten": [],
        "periods": [
            {
                "duration": 120,
                "inactive": False,
                "type": "VAST",
                "reflectionPeriod": 14,
                "rates": [
                    {"type": "NHG", "value": 3.2},
                    {"type": "LTV", "ltv": "80-90%", "value": 3.5},
                    {"type": "LTV", "ltv": "90-100%", "value": 3.8},
                ],
            }
        ],
        "interestRate": 3.2,
        "effectiveRate": 3.25,
        "baseRate": 3.0,
        "appliedDiscounts": ["BANK_ACCOUNT"],
        "calculationDate": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def maximum_mortgage_payload():
    """A representative orientation response from the provider."""
    return {
        "value": {
            "maximumMortgage": 280000,
            "monthlyPayment": 1250,
            "interest": 3.5,
        },
        "messages": ["Calculation completed successfully"],
    }
