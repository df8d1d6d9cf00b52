"""
Tax Advisor Tax Engine — Old vs New regime comparison.
Pure Python, deterministic. Same input → same output.

Every statutory number comes from a TaxTables instance passed in explicitly
(see tax_tables.py). Nothing in this module reads settings or globals at
call time, so calls are independent and safe to run concurrently.

Pipeline:
  TaxInputs → HRA exemption → {old taxable, new taxable}
            → slab tax + 87A rebate + cess (once per regime)
            → recommendation
"""
from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from tax_advisor.agents.evaluator_agent.schemas import (
    DeductionBreakdown,
    Regime,
    RegimeResult,
    TaxComputation,
    TaxResults,
)
from tax_advisor.agents.evaluator_agent.tax_tables import (
    DEFAULT_FISCAL_YEAR,
    RebateRule,
    Slab,
    TaxTables,
    load_tax_tables,
)
from tax_advisor.agents.input_agent.schemas import AgeGroup, TaxInputs


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _round_rupees(amount: float) -> int:
    """Round half-up to whole rupees. Applied once, to the final figure only."""
    return int(math.floor(amount + 0.5))


def _resolve_tables(tables: Optional[TaxTables]) -> TaxTables:
    return tables if tables is not None else load_tax_tables(DEFAULT_FISCAL_YEAR)


def select_old_regime_slabs(age_group: AgeGroup, tables: TaxTables) -> Tuple[Slab, ...]:
    """
    Old regime basic exemption differs by age band.
    Exhaustive over AgeGroup — a new member without a case fails loudly here.
    """
    match age_group:
        case AgeGroup.below60 | AgeGroup.sixty_to_80 | AgeGroup.above80:
            return tables.old_regime_slabs[age_group]
        case _:
            raise ValueError(f"Unhandled age group: {age_group!r}")


# ===========================================================================
# HRA EXEMPTION
# ===========================================================================

def calculate_hra_exemption(
    basic_salary: float,
    hra_received: float,
    rent_paid: float,
    lives_in_metro: bool,
    tables: Optional[TaxTables] = None,
) -> float:
    """
    HRA exemption under Section 10(13A), Rule 2A.
    Returns the minimum of three components, each clipped at 0.

    Component 1: HRA received from employer
    Component 2: annual rent paid - 10% of basic_salary   ← MUST clip at 0
    Component 3: 50% of basic_salary (metro) or 40% (non-metro)

    Rent at or below 10% of basic → exemption 0 (no rent burden).
    """
    tables = _resolve_tables(tables)
    metro_pct = tables.hra_metro_pct if lives_in_metro else tables.hra_non_metro_pct
    component_1 = max(0.0, hra_received)
    component_2 = max(0.0, rent_paid - tables.hra_rent_excess_pct * basic_salary)
    component_3 = max(0.0, metro_pct * basic_salary)
    return min(component_1, component_2, component_3)


# ===========================================================================
# TAXABLE INCOME
# ===========================================================================

def calculate_old_taxable_income(
    inputs: TaxInputs,
    tables: Optional[TaxTables] = None,
) -> Tuple[float, DeductionBreakdown]:
    """
    Old regime taxable income and the capped deductions that produced it.

    Deductions allowed: std deduction, HRA Rule 2A, 80C, 80D (age cap),
    80CCD(1B), Section 24(b), 80TTA (below 60) / 80TTB (60+).
    """
    tables = _resolve_tables(tables)
    caps = tables.caps

    breakdown = DeductionBreakdown(
        standard_deduction=float(tables.old_standard_deduction),
        hra_exemption=calculate_hra_exemption(
            inputs.basic_salary,
            inputs.hra_received,
            inputs.rent_paid,
            inputs.lives_in_metro,
            tables,
        ),
        section_80c=min(inputs.deduction_80c, caps.section_80c),
        section_80d=min(inputs.deduction_80d, caps.section_80d[inputs.age_group]),
        section_80ccd1b=min(inputs.nps_contribution, caps.section_80ccd1b),
        section_24b=min(inputs.home_loan_interest, caps.section_24b),
        section_80tta_ttb=min(inputs.deduction_80tta, caps.section_80tta_ttb[inputs.age_group]),
    )

    # Taxable income (never negative)
    return max(0.0, inputs.gross_salary - breakdown.total), breakdown


def calculate_new_taxable_income(
    inputs: TaxInputs,
    tables: Optional[TaxTables] = None,
) -> Tuple[float, DeductionBreakdown]:
    """
    New regime taxable income (Section 115BAC).

    Only the standard deduction is allowed. HRA, 80C, 80D, 80CCD(1B), 24(b)
    and 80TTA/TTB are all disallowed — every other breakdown field stays 0.
    """
    tables = _resolve_tables(tables)
    breakdown = DeductionBreakdown(standard_deduction=float(tables.new_standard_deduction))
    return max(0.0, inputs.gross_salary - breakdown.total), breakdown


# ===========================================================================
# SLAB TAX
# ===========================================================================

def calculate_slab_tax(taxable_income: float, slabs: Sequence[Slab]) -> float:
    """
    Progressive marginal tax: each slab taxes the part of taxable_income that
    falls in [lower, upper). Unrounded — rounding happens once, at the end.
    """
    if taxable_income <= 0:
        return 0.0

    tax = 0.0
    for slab in sorted(slabs, key=lambda s: s.lower):
        if taxable_income <= slab.lower:
            break
        top = taxable_income if slab.upper is None else min(taxable_income, slab.upper)
        tax += (top - slab.lower) * slab.rate
    return tax


def apply_rebate(taxable_income: float, tax: float, rebate: RebateRule) -> float:
    """
    87A rebate as an all-or-nothing override.
    taxable_income <= ceiling → 0; above the ceiling the full slab tax applies.
    """
    if taxable_income <= rebate.income_ceiling:
        return 0.0
    return tax


def _calculate_regime(
    regime: Regime,
    inputs: TaxInputs,
    taxable_income: float,
    breakdown: DeductionBreakdown,
    slabs: Sequence[Slab],
    rebate: RebateRule,
    cess_rate: float,
) -> RegimeResult:
    slab_tax = calculate_slab_tax(taxable_income, slabs)
    tax_after_87a = apply_rebate(taxable_income, slab_tax, rebate)
    # Cess on post-87A tax — NOT on pre-87A tax
    cess = tax_after_87a * cess_rate

    return RegimeResult(
        regime=regime,
        gross_income=inputs.gross_salary,
        total_deductions=breakdown.total,
        taxable_income=taxable_income,
        slab_tax=slab_tax,
        rebate_applied=tax_after_87a < slab_tax,
        tax_before_cess=tax_after_87a,
        cess=cess,
        total_tax=_round_rupees(tax_after_87a + cess),
        deduction_breakdown=breakdown,
    )


# ===========================================================================
# REGIME CALCULATORS
# ===========================================================================

def calculate_old_regime(
    inputs: TaxInputs,
    tables: Optional[TaxTables] = None,
) -> RegimeResult:
    """Old regime: itemised deductions, age-banded slabs, 87A up to the old ceiling, cess."""
    tables = _resolve_tables(tables)
    taxable_income, breakdown = calculate_old_taxable_income(inputs, tables)
    return _calculate_regime(
        Regime.old,
        inputs,
        taxable_income,
        breakdown,
        select_old_regime_slabs(inputs.age_group, tables),
        tables.old_regime_rebate,
        tables.cess_rate,
    )


def calculate_new_regime(
    inputs: TaxInputs,
    tables: Optional[TaxTables] = None,
) -> RegimeResult:
    """New regime: standard deduction only, age-independent slabs, 87A up to the new ceiling, cess."""
    tables = _resolve_tables(tables)
    taxable_income, breakdown = calculate_new_taxable_income(inputs, tables)
    return _calculate_regime(
        Regime.new,
        inputs,
        taxable_income,
        breakdown,
        tables.new_regime_slabs,
        tables.new_regime_rebate,
        tables.cess_rate,
    )


# ===========================================================================
# RECOMMENDATION — public API
# ===========================================================================

def recommend_regime(old_regime_tax: int, new_regime_tax: int) -> TaxResults:
    """
    Lower tax wins. Ties go to the New Regime (simpler, no investment proofs).
    savings = abs(old - new), so it is 0 on a tie.
    """
    recommended = Regime.old if old_regime_tax < new_regime_tax else Regime.new
    return TaxResults(
        old_regime_tax=old_regime_tax,
        new_regime_tax=new_regime_tax,
        savings=abs(old_regime_tax - new_regime_tax),
        recommended_regime=recommended,
    )


def compute_tax_detailed(
    inputs: TaxInputs,
    tables: Optional[TaxTables] = None,
) -> TaxComputation:
    """Both regime computations plus the recommendation built from their rounded totals."""
    tables = _resolve_tables(tables)
    old = calculate_old_regime(inputs, tables)
    new = calculate_new_regime(inputs, tables)
    return TaxComputation(
        fiscal_year=tables.fiscal_year,
        old_regime=old,
        new_regime=new,
        results=recommend_regime(old.total_tax, new.total_tax),
    )


def compute_tax(inputs: TaxInputs, tables: Optional[TaxTables] = None) -> TaxResults:
    """Compare old and new regime tax for the given inputs."""
    return compute_tax_detailed(inputs, tables).results


__all__ = [
    "calculate_hra_exemption",
    "calculate_old_taxable_income",
    "calculate_new_taxable_income",
    "calculate_slab_tax",
    "apply_rebate",
    "select_old_regime_slabs",
    "calculate_old_regime",
    "calculate_new_regime",
    "recommend_regime",
    "compute_tax_detailed",
    "compute_tax",
]
