"""
schemas.py — EvaluatorAgent Pydantic v2 data contracts.

Defines:
  - Regime              (closed enum: old | new)
  - DeductionBreakdown  (itemised deductions per regime, post-cap)
  - RegimeResult        (full tax computation for one regime)
  - TaxResults          (dual-regime comparison — what the form displays)
  - TaxComputation      (TaxResults + both RegimeResults — detailed endpoint)

TaxResults serializes with camelCase aliases (oldRegimeTax, newRegimeTax,
savings, recommendedRegime) because that is the shape the form reads.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Regime(str, Enum):
    old = "old"
    new = "new"


# ---------------------------------------------------------------------------
# DeductionBreakdown — itemised deductions applied in one regime
# ---------------------------------------------------------------------------

class DeductionBreakdown(BaseModel):
    """
    Itemised deductions used in a regime calculation.

    All values are the ACTUAL deduction applied (after caps), not the raw input.
    For example, section_80c=150000 means ₹1.5L was applied even if input was ₹2L.

    New regime: only standard_deduction will be non-zero.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    standard_deduction: float = 0         # ₹50K old; ₹50K / ₹75K new depending on year
    hra_exemption: float = 0              # min-of-3 — old regime only
    section_80c: float = 0               # Cap ₹1,50,000 — old regime only
    section_80d: float = 0               # Age-dependent cap — old regime only
    section_80ccd1b: float = 0           # Employee NPS, cap ₹50K — old regime only
    section_24b: float = 0               # Home loan interest, cap ₹2L — old regime only
    section_80tta_ttb: float = 0         # 80TTA below 60 / 80TTB 60+ — old regime only

    @property
    def total(self) -> float:
        return (
            self.standard_deduction + self.hra_exemption + self.section_80c
            + self.section_80d + self.section_80ccd1b + self.section_24b
            + self.section_80tta_ttb
        )


# ---------------------------------------------------------------------------
# RegimeResult — full tax calculation for one regime
# ---------------------------------------------------------------------------

class RegimeResult(BaseModel):
    """
    Complete tax computation result for a single regime (old or new).

    Computation sequence (order determines correctness):
      1. total_deductions = sum of applicable capped deductions
      2. taxable_income = max(0, gross_income - total_deductions)
      3. slab_tax = progressive bracket calculation
      4. 87A rebate → tax_before_cess (= 0 if taxable_income <= ceiling)
      5. cess = 4% of tax_before_cess   ← NOT on pre-87A tax
      6. total_tax = round(tax_before_cess + cess)   ← only rounding step
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    regime: Regime
    gross_income: float
    total_deductions: float
    taxable_income: float
    slab_tax: float
    rebate_applied: bool
    tax_before_cess: float       # After 87A rebate, before cess
    cess: float                  # cess_rate × tax_before_cess
    total_tax: int               # Rounded rupees (final payable amount)
    deduction_breakdown: DeductionBreakdown


# ---------------------------------------------------------------------------
# TaxResults — regime comparison output (public API of the engine)
# ---------------------------------------------------------------------------

class TaxResults(BaseModel):
    """
    Output of compute_tax().

    savings is always abs(old_regime_tax - new_regime_tax).
    recommended_regime is the strictly lower-tax regime; ties go to new.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    old_regime_tax: int = Field(ge=0, alias="oldRegimeTax")
    new_regime_tax: int = Field(ge=0, alias="newRegimeTax")
    savings: int = Field(ge=0)
    recommended_regime: Regime = Field(alias="recommendedRegime")


# ---------------------------------------------------------------------------
# TaxComputation — TaxResults with the per-regime working
# ---------------------------------------------------------------------------

class TaxComputation(BaseModel):
    """Output of compute_tax_detailed(). results is identical to compute_tax()."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    fiscal_year: str
    old_regime: RegimeResult
    new_regime: RegimeResult
    results: TaxResults


__all__ = [
    "Regime",
    "DeductionBreakdown",
    "RegimeResult",
    "TaxResults",
    "TaxComputation",
]
