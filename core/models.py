# =============================================================================
# core/models.py  -  Data Models (request schemas, result records, envelope)
# =============================================================================
#
# Three families of "nouns" live here:
#
#   1. REQUEST SCHEMAS (pydantic)
#      InterestRateRequest, MaximumMortgageRequest, PropertyTransferTaxRequest.
#      Raw tool arguments are validated and defaulted here BEFORE any network
#      call.  A bad argument raises pydantic.ValidationError naming the field.
#      Python attributes are snake_case; the wire spelling is camelCase and
#      both are accepted on input.  Numbers and booleans are strict: "50000"
#      is not an income and "yes" is not a boolean.
#
#   2. RESULT RECORDS (pydantic)
#      The normalized shapes that adapters build from the provider payloads.
#      Dumped by alias, so the JSON the agent sees is camelCase.
#
#   3. ENVELOPE
#      ToolResult{success, data?, error?}: every tool returns exactly one.
# =============================================================================

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictFloat
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    """Strict input model: camelCase aliases, unknown fields rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def request_parameters(self) -> dict[str, Any]:
        """The validated, defaulted request as echoed back to the caller.

        Optional fields that were not supplied are left out rather than
        reported as null.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_data(self) -> dict[str, Any]:
        # exclude_unset drops passthrough fields the provider never sent
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# -----------------------------------------------------------------------------
# Closed enumerations
# -----------------------------------------------------------------------------
class Product(str, Enum):
    BUDGET = "BUDGET"
    WONING = "WONING"


class RepaymentType(str, Enum):
    ANNUITAIR = "ANNUITAIR"
    LINEAIR = "LINEAIR"
    AFLOSSINGSVRIJ = "AFLOSSINGSVRIJ"


class SustainabilityLabel(str, Enum):
    B = "B"
    A_OR_HIGHER = "A_OR_HIGHER"


# -----------------------------------------------------------------------------
# Discounts: a closed tagged union on "type"
# -----------------------------------------------------------------------------
class BankAccountDiscount(_WireModel):
    """Discount for holding a payment account at the bank."""

    type: Literal["BANK_ACCOUNT"] = "BANK_ACCOUNT"


class SustainabilityDiscount(_WireModel):
    """Discount for an energy label of B or better."""

    type: Literal["SUSTAINABILITY"] = "SUSTAINABILITY"
    label: SustainabilityLabel


Discount = Annotated[
    Union[BankAccountDiscount, SustainabilityDiscount],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Request schemas
# -----------------------------------------------------------------------------
class InterestRateRequest(_WireModel):
    """Arguments of the calculate-interest-rate tool.

    ``type`` and ``inactive`` are accepted as older spellings of
    ``repaymentType`` and ``includeInactive``.
    """

    product: Product
    repayment_type: RepaymentType = Field(
        validation_alias=AliasChoices("repaymentType", "repayment_type", "type"),
        serialization_alias="repaymentType",
    )
    discounts: list[Discount] = Field(default_factory=list)
    include_inactive: StrictBool = Field(
        default=False,
        validation_alias=AliasChoices("includeInactive", "include_inactive", "inactive"),
        serialization_alias="includeInactive",
    )


class MaximumMortgageRequest(_WireModel):
    """Arguments of the calculate-maximum-mortgage tool (gross yearly incomes, EUR)."""

    main_income: StrictFloat = Field(ge=0, allow_inf_nan=False)
    partner_income: Optional[StrictFloat] = Field(default=None, ge=0, allow_inf_nan=False)


class PropertyTransferTaxRequest(_WireModel):
    house_price: StrictFloat = Field(ge=0, allow_inf_nan=False)


# -----------------------------------------------------------------------------
# Interest-rate result records
# -----------------------------------------------------------------------------
class BridgingCredit(_ResultModel):
    """Bridging-loan summary: current rate, rate sheet date and raw options."""

    rate: Any = None
    rate_sheet_date: Any = None
    options: Any = None


class LtvRate(_ResultModel):
    """One loan-to-value band and its rate."""

    ltv_range: Any = Field(default=None, serialization_alias="range")
    rate: Any = None


class PeriodRates(_ResultModel):
    # National-guarantee (NHG) rate and the loan-to-value tiers
    dutch_national_mortgage_guarantee: Any = None
    life_time_value: list[LtvRate] = Field(default_factory=list)


class MortgagePeriod(_ResultModel):
    """One fixed-rate period as offered by the provider."""

    duration: Any = None               # months
    duration_in_years: Optional[float] = None
    inactive: Any = None
    type: Any = None
    reflection_period: Any = None
    rates: PeriodRates = Field(default_factory=PeriodRates)


class InterestRateResult(_ResultModel):
    bridging_credit: BridgingCredit
    periods: list[MortgagePeriod] = Field(default_factory=list)

    # Legacy passthrough; only present when the provider sends them
    interest_rate: Any = None
    effective_rate: Any = None
    base_rate: Any = None
    applied_discounts: Any = None
    calculation_date: Any = None

    request_parameters: dict[str, Any]


class MaximumMortgageResult(_ResultModel):
    maximum_mortgage: Any = None
    monthly_payment: Any = None
    interest: Any = None
    messages: Any = None
    request_parameters: dict[str, Any]


# -----------------------------------------------------------------------------
# UpstreamRequest: what an adapter is about to send
# -----------------------------------------------------------------------------
# Building the request is separated from sending it, so the exact URL, query
# parameters and body can be inspected without a network round-trip.
# -----------------------------------------------------------------------------
@dataclass
class UpstreamRequest:
    method: str                        # "GET" or "POST"
    url: str                           # endpoint without query string
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    json: Optional[dict[str, Any]] = None


# -----------------------------------------------------------------------------
# ToolResult: the envelope every tool returns
# -----------------------------------------------------------------------------
@dataclass
class ToolResult:
    """Uniform ``{success, data?, error?}`` envelope.

    Failures are conveyed ONLY through ``success=False`` plus a readable
    ``error`` string; nothing is raised across the tool boundary.
    """

    success: bool
    data: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: dict[str, Any]) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, prefix: str, exc: BaseException) -> "ToolResult":
        message = str(exc) or "Unknown error"
        return cls(success=False, error=f"{prefix}: {message}")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result

    def to_json(self) -> str:
        """Pretty-printed (2-space) JSON, the text sent back over MCP."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
