# =============================================================================
# core/tax.py  -  Fixed tax & guarantee facts (no network)
# =============================================================================
#
# Three pure, synchronous lookups that an agent needs next to the rate and
# affordability tools:
#
#   get_mortgage_interest_deduction()       top rate of the interest deduction
#   get_national_mortgage_guarantee_limit() NHG cap on the loan amount
#   calculate_property_transfer_tax()       overdrachtsbelasting on a house price
#
# The constants below are the yearly-published Dutch figures.  When the
# Belastingdienst / NHG publish new ones, this module is the only place that
# changes.
# =============================================================================

import logging
from typing import Any

from core.models import PropertyTransferTaxRequest, ToolResult

logger = logging.getLogger(__name__)

MORTGAGE_INTEREST_DEDUCTION_RATE = 37.48     # percent
NATIONAL_MORTGAGE_GUARANTEE_LIMIT = 450000   # euros
TRANSFER_TAX_THRESHOLD = 525000              # euros; at or below: no tax
TRANSFER_TAX_RATE = 0.02

ERROR_PREFIX = "Failed to calculate property transfer tax"


def get_mortgage_interest_deduction() -> ToolResult:
    """Maximum rate at which mortgage interest can be deducted (percent)."""
    return ToolResult.ok({
        "rate": MORTGAGE_INTEREST_DEDUCTION_RATE,
        "description": (
            f"Mortgage interest is deductible from income tax at a maximum "
            f"rate of {MORTGAGE_INTEREST_DEDUCTION_RATE}%."
        ),
    })


def get_national_mortgage_guarantee_limit() -> ToolResult:
    """Maximum loan amount that can be taken out with the national guarantee (NHG)."""
    return ToolResult.ok({
        "limit": NATIONAL_MORTGAGE_GUARANTEE_LIMIT,
        "description": (
            f"A mortgage of up to EUR {NATIONAL_MORTGAGE_GUARANTEE_LIMIT} can be "
            f"taken out with the National Mortgage Guarantee (NHG)."
        ),
    })


def property_transfer_tax(house_price: float) -> float:
    """Tax owed on ``house_price``: 2% above the threshold, otherwise nothing."""
    if house_price > TRANSFER_TAX_THRESHOLD:
        return house_price * TRANSFER_TAX_RATE
    return 0


def calculate_property_transfer_tax(arguments: dict[str, Any]) -> ToolResult:
    """Validate the house price and compute the transfer tax. Never raises."""
    try:
        request = PropertyTransferTaxRequest.model_validate(arguments)
    except Exception as e:
        logger.warning(f"{ERROR_PREFIX}: {e}")
        return ToolResult.failure(ERROR_PREFIX, e)

    tax_quota = property_transfer_tax(request.house_price)
    if tax_quota:
        description = (
            f"The house price exceeds EUR {TRANSFER_TAX_THRESHOLD}, so "
            f"{TRANSFER_TAX_RATE * 100:g}% transfer tax applies."
        )
    else:
        description = (
            f"No transfer tax is due for a house price up to EUR {TRANSFER_TAX_THRESHOLD}."
        )
    return ToolResult.ok({
        "housePrice": request.house_price,
        "threshold": TRANSFER_TAX_THRESHOLD,
        "taxRate": TRANSFER_TAX_RATE,
        "taxQuota": tax_quota,
        "description": description,
    })
