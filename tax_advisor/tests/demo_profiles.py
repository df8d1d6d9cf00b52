"""
Demo profile fixtures for Tax Advisor tests — FY 2023-24 tables (default).

Profiles are written with the form's wire names (camelCase) so the same dicts
feed normalize_inputs() in engine tests and the JSON body in API tests.
Expected values are hand-computed step by step in the comments.
"""
from __future__ import annotations
from typing import Any

# ---------------------------------------------------------------------------
# Profile 1: Priya — ₹15L gross, metro renter, every old-regime deduction used
# ---------------------------------------------------------------------------
_PRIYA_PROFILE: dict[str, Any] = dict(
    ageGroup="below60",
    grossSalary=1_500_000,
    deduction80c=150_000,
    deduction80d=20_000,
    npsContribution=50_000,
    homeLoanInterest=200_000,
    deduction80tta=5_000,
    basicSalary=600_000,
    hraReceived=200_000,
    rentPaid=240_000,
    livesInMetro=True,
)
# HRA: a=200000, b=240000-60000=180000, c=50%*600000=300000 → 180000
# OLD: ded=655000(std50+hra180+80c150+80d20+nps50+24b200+80tta5), taxable=845000
# slab: 0+12500+20%*345000=69000 → 81500, no 87A (>5L), cess=3260, total=84760
# NEW: std=50000, taxable=1450000 (>7L, no 87A)
# slab: 15000+30000+45000+20%*250000=50000 → 140000, cess=5600, total=145600
_PRIYA_EXPECTED: dict[str, Any] = dict(
    expected_old_tax=84_760,
    expected_new_tax=145_600,
    expected_regime="old",
    expected_savings=60_840,
)

# ---------------------------------------------------------------------------
# Profile 2: Rahul — senior citizen (60to80), ₹12L gross, 80D/80TTB over cap
# ---------------------------------------------------------------------------
_RAHUL_PROFILE: dict[str, Any] = dict(
    ageGroup="60to80",
    grossSalary=1_200_000,
    deduction80c=150_000,
    deduction80d=60_000,            # senior cap 50000
    npsContribution=0,
    homeLoanInterest=0,
    deduction80tta=70_000,          # 80TTB cap 50000
    basicSalary=500_000,
    hraReceived=0,
    rentPaid=0,
    livesInMetro=False,
)
# OLD: ded=300000(std50+80c150+80d50+80ttb50), taxable=900000
# slab (60to80): 0-3L 0, 3-5L 10000, 5-9L 80000 → 90000, cess=3600, total=93600
# NEW: taxable=1150000, slab: 15000+30000+15%*250000=37500 → 82500, cess=3300, total=85800
_RAHUL_EXPECTED: dict[str, Any] = dict(
    expected_old_tax=93_600,
    expected_new_tax=85_800,
    expected_regime="new",
    expected_savings=7_800,
)

# ---------------------------------------------------------------------------
# Profile 3: Anita — ₹6.5L gross, no deductions, new-regime 87A rebate
# ---------------------------------------------------------------------------
_ANITA_PROFILE: dict[str, Any] = dict(
    ageGroup="below60",
    grossSalary=650_000,
    deduction80c="",
    deduction80d="",
    npsContribution="",
    homeLoanInterest="",
    deduction80tta="",
    basicSalary="",
    hraReceived="",
    rentPaid="",
    livesInMetro=False,
)
# OLD: taxable=600000 (>5L, no 87A), slab: 12500+20000=32500, cess=1300, total=33800
# NEW: taxable=600000, slab=15000, 87A: 600000<=700000 → 0, total=0
_ANITA_EXPECTED: dict[str, Any] = dict(
    expected_old_tax=33_800,
    expected_new_tax=0,
    expected_regime="new",
    expected_savings=33_800,
)

# ---------------------------------------------------------------------------
# Profile 4: Kamala — super senior (above80), ₹9L gross, medical insurance
# ---------------------------------------------------------------------------
_KAMALA_PROFILE: dict[str, Any] = dict(
    ageGroup="above80",
    grossSalary=900_000,
    deduction80d=40_000,
)
# OLD: ded=90000(std50+80d40), taxable=810000
# slab (above80): 0-5L 0, 5-8.1L 20%*310000=62000, cess=2480, total=64480
# NEW: taxable=850000, slab: 15000+10%*250000=25000 → 40000 (>7L), cess=1600, total=41600
_KAMALA_EXPECTED: dict[str, Any] = dict(
    expected_old_tax=64_480,
    expected_new_tax=41_600,
    expected_regime="new",
    expected_savings=22_880,
)

# ---------------------------------------------------------------------------
# Public API — single dict keyed by profile name
# ---------------------------------------------------------------------------
DEMO_PROFILES: dict[str, dict[str, Any]] = {
    "priya": {"profile": _PRIYA_PROFILE, "expected": _PRIYA_EXPECTED},
    "rahul": {"profile": _RAHUL_PROFILE, "expected": _RAHUL_EXPECTED},
    "anita": {"profile": _ANITA_PROFILE, "expected": _ANITA_EXPECTED},
    "kamala": {"profile": _KAMALA_PROFILE, "expected": _KAMALA_EXPECTED},
}

__all__ = ["DEMO_PROFILES"]
