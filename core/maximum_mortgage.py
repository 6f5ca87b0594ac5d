# =============================================================================
# core/maximum_mortgage.py  -  Maximum-Mortgage Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Asks the ABN AMRO "snelle hypotheekberekening" (quick mortgage
#   orientation) service how much a household can borrow on its gross
#   yearly income.
#
#   GET ...?mainIncome=50000&partnerIncome=30000
#
#   partnerIncome is only sent when the caller supplied it.  Numbers go out in
#   their plain literal form (50000, not 50000.0).
#
# RESPONSE MAP:
#   value.maximumMortgage → maximumMortgage   (null when absent)
#   value.monthlyPayment  → monthlyPayment    (null when absent)
#   value.interest        → interest          (null when absent)
#   messages              → messages          (passthrough)
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core import config
from core.models import (
    MaximumMortgageRequest,
    MaximumMortgageResult,
    ToolResult,
    UpstreamRequest,
)
from core.upstream import send

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to calculate maximum mortgage"


def format_number(value: float) -> str:
    """Literal numeric form for a query string: 50000.0 → "50000", 0.5 → "0.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def build_maximum_mortgage_request(request: MaximumMortgageRequest) -> UpstreamRequest:
    params = {"mainIncome": format_number(request.main_income)}
    if request.partner_income is not None:
        params["partnerIncome"] = format_number(request.partner_income)
    return UpstreamRequest(
        method="GET",
        url=config.maximum_mortgage_url(),
        params=params,
        headers={"Accept": "application/json"},
    )


def normalize_maximum_mortgage(
    payload: dict[str, Any],
    request: MaximumMortgageRequest,
) -> MaximumMortgageResult:
    value = payload.get("value")
    if not isinstance(value, dict):
        value = {}
    return MaximumMortgageResult(
        maximum_mortgage=value.get("maximumMortgage"),
        monthly_payment=value.get("monthlyPayment"),
        interest=value.get("interest"),
        messages=payload.get("messages"),
        request_parameters=request.request_parameters(),
    )


async def calculate_maximum_mortgage(
    arguments: dict[str, Any],
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResult:
    """Validate, call the orientation service, and wrap the outcome. Never raises."""
    try:
        request = MaximumMortgageRequest.model_validate(arguments)
        payload = await send(build_maximum_mortgage_request(request), client=client)
        result = normalize_maximum_mortgage(payload, request)
        logger.info(f"Maximum mortgage calculated: {result.maximum_mortgage}")
        return ToolResult.ok(result.to_data())
    except Exception as e:
        logger.warning(f"{ERROR_PREFIX}: {e}")
        return ToolResult.failure(ERROR_PREFIX, e)
