"""
Statutory tax tables — slabs, deduction caps, rebate ceilings, cess.

Every number the engine uses lives here, keyed by fiscal year, so a Budget
change is a new TaxTables entry rather than a code change. Tables are frozen
pydantic models and are shared read-only across requests: the per-age-group
mappings and the TAX_TABLES registry are MappingProxyType views.

Built-in years:
  FY2023-24 (AY 2024-25)  ← DEFAULT. Standard deduction ₹50K in BOTH regimes.
  FY2024-25 (AY 2025-26)  New regime std deduction ₹75K, slabs 3/7/10/12/15L.
  FY2025-26 (AY 2026-27)  Budget 2025 new slabs 4/8/12/16/20/24L, 87A up to ₹12L.

Old regime slabs are unchanged across all three years.

A custom table can be supplied as JSON (same shape as TaxTables.model_dump()).
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from tax_advisor.agents.input_agent.schemas import AgeGroup

logger = logging.getLogger(__name__)

DEFAULT_FISCAL_YEAR = "FY2023-24"

# ===========================================================================
# CONSTANTS COMMON TO ALL BUILT-IN YEARS
# ===========================================================================

OLD_STD_DEDUCTION        = 50_000
CESS_RATE                = 0.04

CAP_80C                  = 150_000
CAP_80CCD1B              = 50_000    # Employee NPS — old regime only
CAP_24B                  = 200_000   # Home loan interest — old regime only

CAP_80D_BELOW60          = 25_000
CAP_80D_SENIOR           = 50_000    # 60to80 and above80

CAP_80TTA                = 10_000    # Savings interest — below60
CAP_80TTB                = 50_000    # All deposit interest — 60to80 and above80

HRA_METRO_PCT            = 0.50
HRA_NON_METRO_PCT        = 0.40
HRA_RENT_EXCESS_PCT      = 0.10      # rent paid minus 10% of basic

OLD_87A_TAXABLE_CEILING  = 500_000


# ===========================================================================
# TABLE MODELS
# ===========================================================================

class Slab(BaseModel):
    """One income bracket: income in [lower, upper) is taxed at rate. upper=None → unbounded."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower: float = Field(ge=0)
    upper: Optional[float] = None
    rate: float = Field(ge=0, le=1)


class RebateRule(BaseModel):
    """
    Section 87A as an all-or-nothing override applied after the slab sum:
    taxable_income <= income_ceiling → tax is zero.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    income_ceiling: float = Field(ge=0)


class DeductionCaps(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    section_80c: float = Field(default=CAP_80C, ge=0)
    section_80ccd1b: float = Field(default=CAP_80CCD1B, ge=0)
    section_24b: float = Field(default=CAP_24B, ge=0)
    section_80d: Mapping[AgeGroup, float]
    section_80tta_ttb: Mapping[AgeGroup, float]

    @field_validator("section_80d", "section_80tta_ttb", mode="after")
    @classmethod
    def _read_only_caps(cls, value: Mapping[AgeGroup, float]) -> Mapping[AgeGroup, float]:
        return MappingProxyType(dict(value))

    @field_serializer("section_80d", "section_80tta_ttb")
    def _dump_caps(self, value: Mapping[AgeGroup, float]) -> Dict[AgeGroup, float]:
        return dict(value)

    @model_validator(mode="after")
    def _every_age_group_capped(self) -> "DeductionCaps":
        for name in ("section_80d", "section_80tta_ttb"):
            missing = set(AgeGroup) - set(getattr(self, name))
            if missing:
                raise ValueError(
                    f"{name} has no cap for age group(s): "
                    f"{', '.join(sorted(g.value for g in missing))}"
                )
        return self


def _check_slabs(name: str, slabs: Tuple[Slab, ...]) -> None:
    """Slabs must start at 0, be contiguous and ascending, with only the last unbounded."""
    if not slabs:
        raise ValueError(f"{name}: at least one slab is required")
    if slabs[0].lower != 0:
        raise ValueError(f"{name}: first slab must start at 0")
    for current, following in zip(slabs, slabs[1:]):
        if current.upper is None:
            raise ValueError(f"{name}: only the last slab may be unbounded")
        if current.upper <= current.lower:
            raise ValueError(f"{name}: slab upper bound must exceed its lower bound")
        if following.lower != current.upper:
            raise ValueError(f"{name}: slabs must be contiguous ({current.upper} != {following.lower})")
    if slabs[-1].upper is not None:
        raise ValueError(f"{name}: last slab must be unbounded (upper=None)")


class TaxTables(BaseModel):
    """All statutory parameters for one fiscal year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    fiscal_year: str
    old_standard_deduction: float = Field(default=OLD_STD_DEDUCTION, ge=0)
    new_standard_deduction: float = Field(ge=0)
    cess_rate: float = Field(default=CESS_RATE, ge=0, le=1)

    hra_metro_pct: float = Field(default=HRA_METRO_PCT, ge=0, le=1)
    hra_non_metro_pct: float = Field(default=HRA_NON_METRO_PCT, ge=0, le=1)
    hra_rent_excess_pct: float = Field(default=HRA_RENT_EXCESS_PCT, ge=0, le=1)

    caps: DeductionCaps

    old_regime_slabs: Mapping[AgeGroup, Tuple[Slab, ...]]
    new_regime_slabs: Tuple[Slab, ...]

    old_regime_rebate: RebateRule
    new_regime_rebate: RebateRule

    @field_validator("old_regime_slabs", mode="after")
    @classmethod
    def _read_only_slabs(
        cls, value: Mapping[AgeGroup, Tuple[Slab, ...]]
    ) -> Mapping[AgeGroup, Tuple[Slab, ...]]:
        return MappingProxyType(dict(value))

    @field_serializer("old_regime_slabs")
    def _dump_slabs(
        self, value: Mapping[AgeGroup, Tuple[Slab, ...]]
    ) -> Dict[AgeGroup, Tuple[Slab, ...]]:
        return dict(value)

    @model_validator(mode="after")
    def _validate_slab_tables(self) -> "TaxTables":
        missing = set(AgeGroup) - set(self.old_regime_slabs)
        if missing:
            raise ValueError(
                "old_regime_slabs has no table for age group(s): "
                f"{', '.join(sorted(g.value for g in missing))}"
            )
        for age_group, slabs in self.old_regime_slabs.items():
            _check_slabs(f"old_regime_slabs[{age_group.value}]", slabs)
        _check_slabs("new_regime_slabs", self.new_regime_slabs)
        return self


# ===========================================================================
# BUILT-IN TABLES
# ===========================================================================

def _slabs(*brackets: Tuple[Optional[float], float]) -> Tuple[Slab, ...]:
    """Build contiguous slabs from (upper, rate) pairs; the last upper is None."""
    slabs = []
    lower = 0.0
    for upper, rate in brackets:
        slabs.append(Slab(lower=lower, upper=upper, rate=rate))
        lower = upper if upper is not None else lower
    return tuple(slabs)


# Old regime — age-dependent basic exemption, then 5% / 20% / 30%
OLD_REGIME_SLABS: Mapping[AgeGroup, Tuple[Slab, ...]] = MappingProxyType({
    AgeGroup.below60: _slabs(
        (250_000, 0.00),     # 0–2.5L: 0%
        (500_000, 0.05),     # 2.5–5L: 5%
        (1_000_000, 0.20),   # 5–10L: 20%
        (None, 0.30),        # >10L: 30%
    ),
    AgeGroup.sixty_to_80: _slabs(
        (300_000, 0.00),     # 0–3L: 0% (senior citizen)
        (500_000, 0.05),
        (1_000_000, 0.20),
        (None, 0.30),
    ),
    AgeGroup.above80: _slabs(
        (500_000, 0.00),     # 0–5L: 0% (super senior citizen)
        (1_000_000, 0.20),
        (None, 0.30),
    ),
})

_DEFAULT_CAPS = DeductionCaps(
    section_80d={
        AgeGroup.below60: CAP_80D_BELOW60,
        AgeGroup.sixty_to_80: CAP_80D_SENIOR,
        AgeGroup.above80: CAP_80D_SENIOR,
    },
    section_80tta_ttb={
        AgeGroup.below60: CAP_80TTA,
        AgeGroup.sixty_to_80: CAP_80TTB,
        AgeGroup.above80: CAP_80TTB,
    },
)

FY2023_24 = TaxTables(
    fiscal_year="FY2023-24",
    new_standard_deduction=50_000,
    caps=_DEFAULT_CAPS,
    old_regime_slabs=OLD_REGIME_SLABS,
    new_regime_slabs=_slabs(
        (300_000, 0.00),     # 0–3L: 0%
        (600_000, 0.05),     # 3–6L: 5%
        (900_000, 0.10),     # 6–9L: 10%
        (1_200_000, 0.15),   # 9–12L: 15%
        (1_500_000, 0.20),   # 12–15L: 20%
        (None, 0.30),        # >15L: 30%
    ),
    old_regime_rebate=RebateRule(income_ceiling=OLD_87A_TAXABLE_CEILING),
    new_regime_rebate=RebateRule(income_ceiling=700_000),
)

FY2024_25 = TaxTables(
    fiscal_year="FY2024-25",
    new_standard_deduction=75_000,
    caps=_DEFAULT_CAPS,
    old_regime_slabs=OLD_REGIME_SLABS,
    new_regime_slabs=_slabs(
        (300_000, 0.00),     # 0–3L: 0%
        (700_000, 0.05),     # 3–7L: 5%
        (1_000_000, 0.10),   # 7–10L: 10%
        (1_200_000, 0.15),   # 10–12L: 15%
        (1_500_000, 0.20),   # 12–15L: 20%
        (None, 0.30),        # >15L: 30%
    ),
    old_regime_rebate=RebateRule(income_ceiling=OLD_87A_TAXABLE_CEILING),
    new_regime_rebate=RebateRule(income_ceiling=700_000),
)

FY2025_26 = TaxTables(
    fiscal_year="FY2025-26",
    new_standard_deduction=75_000,
    caps=_DEFAULT_CAPS,
    old_regime_slabs=OLD_REGIME_SLABS,
    new_regime_slabs=_slabs(
        (400_000, 0.00),     # 0–4L: 0%
        (800_000, 0.05),     # 4–8L: 5%
        (1_200_000, 0.10),   # 8–12L: 10%
        (1_600_000, 0.15),   # 12–16L: 15%
        (2_000_000, 0.20),   # 16–20L: 20%
        (2_400_000, 0.25),   # 20–24L: 25%
        (None, 0.30),        # >24L: 30%
    ),
    old_regime_rebate=RebateRule(income_ceiling=OLD_87A_TAXABLE_CEILING),
    new_regime_rebate=RebateRule(income_ceiling=1_200_000),
)

TAX_TABLES: Mapping[str, TaxTables] = MappingProxyType({
    t.fiscal_year: t for t in (FY2023_24, FY2024_25, FY2025_26)
})


def load_tax_tables(
    fiscal_year: str = DEFAULT_FISCAL_YEAR,
    path: Optional[str] = None,
) -> TaxTables:
    """
    Return the table for fiscal_year, or parse a custom table from a JSON file.

    Raises:
        ValueError: unknown fiscal year, or a JSON table that fails validation.
        OSError: the JSON file cannot be read.
    """
    if path:
        tables = TaxTables.model_validate_json(Path(path).read_text(encoding="utf-8"))
        logger.info("Loaded custom tax tables fiscal_year=%s path=%s", tables.fiscal_year, path)
        return tables

    try:
        return TAX_TABLES[fiscal_year]
    except KeyError:
        raise ValueError(
            f"Unknown fiscal year {fiscal_year!r}. "
            f"Available: {', '.join(sorted(TAX_TABLES))}"
        ) from None


__all__ = [
    "DEFAULT_FISCAL_YEAR",
    "Slab",
    "RebateRule",
    "DeductionCaps",
    "TaxTables",
    "TAX_TABLES",
    "load_tax_tables",
]
