"""
schemas.py — InputAgent Pydantic v2 data contracts.

Defines:
  - AgeGroup enum (closed set — slab selection is exhaustive over it)
  - TaxInputs      (the central data contract — the engine consumes only this)
  - AdviceRequest  (form envelope: {"inputs": {...}})
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

WIRE NAMES (from the tax form — do not rename):
  - ageGroup (the form posts it as "age"; both are accepted)
  - grossSalary, deduction80c, deduction80d, npsContribution,
    homeLoanInterest, deduction80tta, basicSalary, hraReceived,
    rentPaid, livesInMetro

All numeric fields are normalized by normalizer.coerce_amount() BEFORE
field validation, so construction never fails on a malformed amount.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tax_advisor.agents.input_agent.normalizer import coerce_amount, coerce_flag


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AgeGroup(str, Enum):
    below60 = "below60"
    sixty_to_80 = "60to80"
    above80 = "above80"


# ---------------------------------------------------------------------------
# TaxInputs — central data contract
# ---------------------------------------------------------------------------

_AMOUNT_FIELDS = (
    "gross_salary",
    "deduction_80c",
    "deduction_80d",
    "nps_contribution",
    "home_loan_interest",
    "deduction_80tta",
    "basic_salary",
    "hra_received",
    "rent_paid",
)


class TaxInputs(BaseModel):
    """
    One taxpayer's inputs for a single regime comparison.

    All monetary fields are ANNUAL amounts in INR.
    Missing, blank, non-numeric, negative or non-finite amounts become 0.
    An unknown age group is rejected (ValueError) — the set is closed.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    age_group: AgeGroup = Field(
        default=AgeGroup.below60,
        validation_alias=AliasChoices("ageGroup", "age", "age_group"),
        serialization_alias="ageGroup",
        description="Determines old-regime slabs and the 80D / 80TTA-80TTB caps.",
    )

    # --- Income ---
    gross_salary: float = Field(
        default=0, ge=0, alias="grossSalary",
        description="Gross annual salary. Standard deduction is applied by the engine.",
    )

    # --- Old-regime deductions (ignored by the new regime) ---
    deduction_80c: float = Field(
        default=0, ge=0, alias="deduction80c",
        description="Section 80C investments (PPF, ELSS, LIC, EPF...). Engine caps at ₹1,50,000.",
    )
    deduction_80d: float = Field(
        default=0, ge=0, alias="deduction80d",
        description="Section 80D medical insurance premium. Cap depends on age group.",
    )
    nps_contribution: float = Field(
        default=0, ge=0, alias="npsContribution",
        description="Employee NPS under Section 80CCD(1B). Engine caps at ₹50,000.",
    )
    home_loan_interest: float = Field(
        default=0, ge=0, alias="homeLoanInterest",
        description="Section 24(b) self-occupied home loan interest. Engine caps at ₹2,00,000.",
    )
    deduction_80tta: float = Field(
        default=0, ge=0, alias="deduction80tta",
        description="Interest income: 80TTA below 60 (cap ₹10,000), 80TTB for 60+ (cap ₹50,000).",
    )

    # --- HRA inputs (old regime only) ---
    basic_salary: float = Field(default=0, ge=0, alias="basicSalary")
    hra_received: float = Field(default=0, ge=0, alias="hraReceived")
    rent_paid: float = Field(
        default=0, ge=0, alias="rentPaid",
        description="Total rent paid for the year (annual, not monthly).",
    )
    lives_in_metro: bool = Field(
        default=False, alias="livesInMetro",
        description="Metro city → 50% of basic in the HRA rule, otherwise 40%.",
    )

    @field_validator(*_AMOUNT_FIELDS, mode="before")
    @classmethod
    def _normalize_amount(cls, value: Any, info) -> float:
        return coerce_amount(value, field_name=info.field_name)

    @field_validator("lives_in_metro", mode="before")
    @classmethod
    def _normalize_flag(cls, value: Any) -> bool:
        return coerce_flag(value)

    @field_validator("age_group", mode="before")
    @classmethod
    def _default_blank_age_group(cls, value: Any) -> Any:
        """Blank selection falls back to the form default; anything else must be a known tag."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return AgeGroup.below60
        if isinstance(value, str):
            return value.strip()
        return value


class AdviceRequest(BaseModel):
    """Request body for POST /api/advice — the form wraps its fields in "inputs"."""
    model_config = ConfigDict(extra="ignore")

    inputs: TaxInputs = Field(default_factory=TaxInputs)


# ---------------------------------------------------------------------------
# Error response models — used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation or contract error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "inputs.ageGroup"
    issue: str                     # Human-readable description of the problem


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, NOT_FOUND, etc.
    message: str                                   # High-level error description
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "AgeGroup",
    "TaxInputs",
    "AdviceRequest",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
