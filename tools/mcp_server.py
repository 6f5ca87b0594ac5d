# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers every MCP tool and the one MCP prompt this server offers.  Each
#   tool is a thin wrapper around a core/ function: it logs the call, hands
#   the arguments to core/ (which validates them again and never raises), and
#   returns the ToolResult envelope as pretty-printed JSON text.
#
# THE FLOW:
#   1. The client calls a tool by name (e.g., "calculate-interest-rate")
#   2. FastMCP checks the arguments against the published input schema
#   3. The function below forwards them to core/
#   4. core/ validates, calls ABN AMRO if needed, and returns a ToolResult
#   5. The client receives {"success": ..., "data" | "error": ...} as text
#
# TOOLS:
#   calculate-interest-rate               POST to the interest-rate service
#   calculate-maximum-mortgage            GET the quick orientation service
#   get-mortgage-interest-deduction       fixed fact
#   get-national-mortgage-guarantee-limit fixed fact
#   calculate-property-transfer-tax       computed locally
#
# PROMPT:
#   mortgage-guidance(message)
#
# RUNNING THIS SERVER:
#   a) python main.py                     (stdio, loads .env first)
#   b) python -m tools.mcp_server         (stdio)
#   c) MCP_TRANSPORT=http python main.py  (streamable HTTP)
# =============================================================================

import json
import logging
import sys
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from core import config
from core.interest_rate import calculate_interest_rate
from core.maximum_mortgage import calculate_maximum_mortgage
from core.models import Product, RepaymentType, SustainabilityLabel, ToolResult
from core.prompt import render_mortgage_guidance
from core.tax import (
    calculate_property_transfer_tax,
    get_mortgage_interest_deduction,
    get_national_mortgage_guarantee_limit,
)

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: with the stdio transport, STDOUT carries the MCP JSON
# stream and must contain nothing else.
#
# Colours:
#   CYAN    incoming tool calls with their parameters
#   YELLOW  intermediate status
#   GREEN   outgoing envelopes
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: ToolResult) -> str:
    """Log the envelope as compact JSON in GREEN, then return its wire text."""
    compact = json.dumps(result.to_dict(), separators=(",", ":"), ensure_ascii=False)
    logging.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return result.to_json()


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("abn-amro-financial")


# =============================================================================
# Argument schemas
# =============================================================================
# Tool arguments are published with their camelCase wire names and with JSON
# schema hints (enums, minimum, discount shapes), but they are typed loosely
# on the Python side: FastMCP passes the raw values through and core/ does
# the actual validation.  A bad value therefore comes back as a
# {"success": false, "error": ...} envelope, never as a protocol error.
# =============================================================================
_NON_NEGATIVE_NUMBER = {"type": "number", "minimum": 0}

_DISCOUNTS_SCHEMA = {
    "type": "array",
    "items": {
        "oneOf": [
            {
                "type": "object",
                "properties": {"type": {"const": "BANK_ACCOUNT"}},
                "required": ["type"],
                "additionalProperties": False,
            },
            {
                "type": "object",
                "properties": {
                    "type": {"const": "SUSTAINABILITY"},
                    "label": {"enum": [label.value for label in SustainabilityLabel]},
                },
                "required": ["type", "label"],
                "additionalProperties": False,
            },
        ]
    },
}


# =============================================================================
# TOOL 1: calculate-interest-rate
# =============================================================================
@mcp.tool(
    name="calculate-interest-rate",
    description=(
        "Calculate mortgage interest rates for ABN AMRO products with "
        "various discounts"
    ),
)
async def calculate_interest_rate_tool(
    product: Annotated[
        Any,
        Field(
            description="The mortgage product type, by default use the budget account",
            json_schema_extra={"type": "string", "enum": [p.value for p in Product]},
        ),
    ],
    repaymentType: Annotated[
        Any,
        Field(
            description="The mortgage repayment type",
            json_schema_extra={"type": "string", "enum": [t.value for t in RepaymentType]},
        ),
    ],
    discounts: Annotated[
        Any,
        Field(
            description=(
                "Applicable discounts. Always apply the BANK_ACCOUNT discount, "
                "even if the prompt does not ask for it"
            ),
            json_schema_extra=_DISCOUNTS_SCHEMA,
        ),
    ] = None,
    includeInactive: Annotated[
        Any,
        Field(
            description=(
                "Include inactive rates. Leave false unless the prompt "
                "explicitly asks for them"
            ),
            json_schema_extra={"type": "boolean"},
        ),
    ] = False,
) -> str:
    """Look up current interest rates per fixed-rate period.

    Returns a JSON envelope whose data holds:
      - bridgingCredit: rate, rateSheetDate, options
      - periods: duration (months), durationInYears, inactive, type,
        reflectionPeriod, rates {dutchNationalMortgageGuarantee, lifeTimeValue}
      - requestParameters: the validated request
    """
    _log_request(
        "calculate-interest-rate",
        product=product, repaymentType=repaymentType,
        discounts=discounts, includeInactive=includeInactive,
    )
    arguments = {
        "product": product,
        "repaymentType": repaymentType,
        "includeInactive": includeInactive,
    }
    if discounts is not None:
        arguments["discounts"] = discounts
    result = await calculate_interest_rate(arguments)
    if result.success:
        _log_status(f"{len(result.data.get('periods', []))} periods returned")
    return _log_response("calculate-interest-rate", result)


# =============================================================================
# TOOL 2: calculate-maximum-mortgage
# =============================================================================
@mcp.tool(
    name="calculate-maximum-mortgage",
    description="Calculate maximum mortgage amount and monthly payment based on income",
)
async def calculate_maximum_mortgage_tool(
    mainIncome: Annotated[
        Any,
        Field(
            description="Main applicant's annual gross income in euros",
            json_schema_extra=_NON_NEGATIVE_NUMBER,
        ),
    ],
    partnerIncome: Annotated[
        Any,
        Field(
            description="Partner's annual gross income in euros (optional)",
            json_schema_extra=_NON_NEGATIVE_NUMBER,
        ),
    ] = None,
) -> str:
    """Estimate how much can be borrowed on one or two gross yearly incomes."""
    _log_request(
        "calculate-maximum-mortgage",
        mainIncome=mainIncome, partnerIncome=partnerIncome,
    )
    arguments = {"mainIncome": mainIncome}
    if partnerIncome is not None:
        arguments["partnerIncome"] = partnerIncome
    result = await calculate_maximum_mortgage(arguments)
    return _log_response("calculate-maximum-mortgage", result)


# =============================================================================
# TOOLS 3-5: fixed facts
# =============================================================================
@mcp.tool(
    name="get-mortgage-interest-deduction",
    description="Get the maximum rate at which mortgage interest is tax deductible",
)
def get_mortgage_interest_deduction_tool() -> str:
    _log_request("get-mortgage-interest-deduction")
    return _log_response("get-mortgage-interest-deduction", get_mortgage_interest_deduction())


@mcp.tool(
    name="get-national-mortgage-guarantee-limit",
    description="Get the maximum loan amount covered by the National Mortgage Guarantee (NHG)",
)
def get_national_mortgage_guarantee_limit_tool() -> str:
    _log_request("get-national-mortgage-guarantee-limit")
    return _log_response(
        "get-national-mortgage-guarantee-limit", get_national_mortgage_guarantee_limit()
    )


@mcp.tool(
    name="calculate-property-transfer-tax",
    description="Calculate the property transfer tax owed when buying a house",
)
def calculate_property_transfer_tax_tool(
    housePrice: Annotated[
        Any,
        Field(
            description="Purchase price of the house in euros",
            json_schema_extra=_NON_NEGATIVE_NUMBER,
        ),
    ],
) -> str:
    _log_request("calculate-property-transfer-tax", housePrice=housePrice)
    result = calculate_property_transfer_tax({"housePrice": housePrice})
    return _log_response("calculate-property-transfer-tax", result)


# =============================================================================
# PROMPT: mortgage-guidance
# =============================================================================
@mcp.prompt(
    name="mortgage-guidance",
    description="Ask for help with ABN AMRO mortgage calculations and interest rates",
)
def mortgage_guidance(message: str) -> str:
    return render_mortgage_guidance(message)


def run() -> None:
    """Start the server on the configured transport (stdio by default)."""
    transport = config.mcp_transport()
    logging.info(f"ABN AMRO MCP server running on {transport}")
    mcp.run(transport=transport)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    run()
