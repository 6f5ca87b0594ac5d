# =============================================================================
# core/interest_rate.py  -  Interest-Rate Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns loosely-specified tool arguments into a call to the ABN AMRO
#   customer interest-rate service and reshapes the (Dutch-named) response
#   into a stable output record.
#
# THE PIPELINE (one call, one request, no shared state):
#   1. validate   raw arguments → InterestRateRequest      (core/models.py)
#   2. build      InterestRateRequest → UpstreamRequest     (this module)
#   3. send       UpstreamRequest → provider payload        (core/upstream.py)
#   4. normalize  payload → InterestRateResult              (this module)
#   5. wrap       → ToolResult; ANY exception → success=False
#
# WIRE DETAILS:
#   - POST body is exactly {product, repaymentType, discounts}.
#   - include_inactive never goes into the body.  It becomes ?inactive=true,
#     and when false the parameter is left off the URL entirely.
#
# PROVIDER FIELD MAP:
#   overbruggingskrediet    → bridgingCredit.rate
#   renteblad               → bridgingCredit.rateSheetDate
#   overbruggingskredieten  → bridgingCredit.options
#   periods[].rates[type=NHG] (first only) → rates.dutchNationalMortgageGuarantee
#   periods[].rates[type=LTV] (all)        → rates.lifeTimeValue[{range, rate}]
# =============================================================================

import logging
import math
from typing import Any, Optional

import httpx

from core import config
from core.models import (
    BankAccountDiscount,
    BridgingCredit,
    InterestRateRequest,
    InterestRateResult,
    LtvRate,
    MortgagePeriod,
    PeriodRates,
    SustainabilityDiscount,
    ToolResult,
    UpstreamRequest,
)
from core.upstream import send

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Failed to calculate interest rate"

NATIONAL_GUARANTEE_TYPE = "NHG"
LOAN_TO_VALUE_TYPE = "LTV"

_LEGACY_FIELDS = (
    "interestRate",
    "effectiveRate",
    "baseRate",
    "appliedDiscounts",
    "calculationDate",
)


def discount_to_wire(discount: BankAccountDiscount | SustainabilityDiscount) -> dict[str, str]:
    """Serialize one discount variant into the provider's shape."""
    if isinstance(discount, BankAccountDiscount):
        return {"type": "BANK_ACCOUNT"}
    if isinstance(discount, SustainabilityDiscount):
        return {"type": "SUSTAINABILITY", "label": discount.label.value}
    raise TypeError(f"Unsupported discount variant: {type(discount).__name__}")


def build_interest_rate_request(request: InterestRateRequest) -> UpstreamRequest:
    params = {"inactive": "true"} if request.include_inactive else {}
    return UpstreamRequest(
        method="POST",
        url=config.interest_rate_url(),
        params=params,
        headers={"Content-Type": "application/json"},
        json={
            "product": request.product.value,
            "repaymentType": request.repayment_type.value,
            "discounts": [discount_to_wire(d) for d in request.discounts],
        },
    )


def duration_in_years(duration: Any) -> Optional[float]:
    """Months → years, rounded half-up to one decimal (125 → 10.4).

    Returns None when the provider sent no usable duration.
    """
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        return None
    return math.floor(duration / 12 * 10 + 0.5) / 10


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _normalize_rates(raw_rates: Any) -> PeriodRates:
    entries = [r for r in _as_list(raw_rates) if isinstance(r, dict)]

    # First NHG entry wins; any later ones are dropped.
    guarantee = next(
        (r.get("value") for r in entries if r.get("type") == NATIONAL_GUARANTEE_TYPE),
        None,
    )
    ltv = [
        LtvRate(ltv_range=r.get("ltv"), rate=r.get("value"))
        for r in entries
        if r.get("type") == LOAN_TO_VALUE_TYPE
    ]
    return PeriodRates(dutch_national_mortgage_guarantee=guarantee, life_time_value=ltv)


def _normalize_period(period: dict[str, Any]) -> MortgagePeriod:
    duration = period.get("duration")
    return MortgagePeriod(
        duration=duration,
        duration_in_years=duration_in_years(duration),
        inactive=period.get("inactive"),
        type=period.get("type"),
        reflection_period=period.get("reflectionPeriod"),
        rates=_normalize_rates(period.get("rates")),
    )


def normalize_interest_rate(
    payload: dict[str, Any],
    request: InterestRateRequest,
) -> InterestRateResult:
    """Reshape a provider payload into an InterestRateResult.

    Every provider field is optional.  A missing periods list gives an empty
    list, and the legacy fields are only copied when the provider sent them.
    """
    legacy = {
        name: payload[name]
        for name in _LEGACY_FIELDS
        if name in payload
    }
    return InterestRateResult.model_validate(
        {
            "bridgingCredit": BridgingCredit(
                rate=payload.get("overbruggingskrediet"),
                rate_sheet_date=payload.get("renteblad"),
                options=payload.get("overbruggingskredieten"),
            ),
            "periods": [
                _normalize_period(p)
                for p in _as_list(payload.get("periods"))
                if isinstance(p, dict)
            ],
            **legacy,
            "requestParameters": request.request_parameters(),
        }
    )


async def calculate_interest_rate(
    arguments: dict[str, Any],
    client: Optional[httpx.AsyncClient] = None,
) -> ToolResult:
    """Validate, call the interest-rate service, and wrap the outcome.

    Args:
        arguments: Raw tool arguments (camelCase or snake_case keys).
        client: Optional httpx client to send through.

    Returns:
        A ToolResult.  Never raises.
    """
    try:
        request = InterestRateRequest.model_validate(arguments)
        payload = await send(build_interest_rate_request(request), client=client)
        result = normalize_interest_rate(payload, request)
        logger.info(f"Interest rate calculated: {len(result.periods)} periods")
        return ToolResult.ok(result.to_data())
    except Exception as e:
        logger.warning(f"{ERROR_PREFIX}: {e}")
        return ToolResult.failure(ERROR_PREFIX, e)
