# =============================================================================
# core/config.py  -  Environment-driven settings
# =============================================================================
#
# All settings come from environment variables (main.py loads a .env file
# first via python-dotenv).  They are read at CALL time, not import time, so
# a test can monkeypatch the environment without reloading anything.
#
#   ABN_AMRO_INTEREST_RATE_URL      POST endpoint for interest-rate lookups
#   ABN_AMRO_MAXIMUM_MORTGAGE_URL   GET endpoint for the quick orientation
#   LOG_LEVEL                       DEBUG / INFO / WARNING ... (default INFO)
#   MCP_TRANSPORT                   stdio (default), http or sse
# =============================================================================

import os

DEFAULT_INTEREST_RATE_URL = (
    "https://hypotheken.abnamro.nl/mortgage-customer-interest-rate-calculation"
    "/v1/interest-rates/calculate"
)
DEFAULT_MAXIMUM_MORTGAGE_URL = (
    "https://hypotheken.abnamro.nl/hypotheekorientatie"
    "/api/v1.0/snelle-hypotheek-berekening"
)


def interest_rate_url() -> str:
    """Endpoint of the customer interest-rate calculation service."""
    return os.environ.get("ABN_AMRO_INTEREST_RATE_URL", DEFAULT_INTEREST_RATE_URL)


def maximum_mortgage_url() -> str:
    """Endpoint of the quick maximum-mortgage orientation service."""
    return os.environ.get("ABN_AMRO_MAXIMUM_MORTGAGE_URL", DEFAULT_MAXIMUM_MORTGAGE_URL)


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def mcp_transport() -> str:
    return os.environ.get("MCP_TRANSPORT", "stdio").lower()
