"""
Input normalizer tests.

Amounts: every malformed value becomes 0, nothing raises.
Age group: blank → below60, unknown tag → ValueError (closed set).
"""
from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

import pytest
from pydantic import ValidationError

from tax_advisor.agents.input_agent.normalizer import (
    coerce_amount,
    coerce_flag,
    normalize_inputs,
)
from tax_advisor.agents.input_agent.schemas import AgeGroup, TaxInputs


# ===========================================================================
# coerce_amount
# ===========================================================================

@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("   ", 0.0),
        ("abc", 0.0),
        ("1,50,000", 0.0),        # grouped digits are not a number
        ("-500", 0.0),
        (-1, 0.0),
        (math.inf, 0.0),
        (math.nan, 0.0),
        ("1e400", 0.0),           # overflows to inf
        (10 ** 400, 0.0),         # int too large for a float
        (Decimal("sNaN"), 0.0),
        ("1_000", 0.0),           # underscore literals are not form numbers
        (True, 0.0),
        ([100], 0.0),
        (0, 0.0),
        (150_000, 150_000.0),
        (12.5, 12.5),
        ("150000", 150_000.0),
        (" 2500.75 ", 2_500.75),
        (Decimal("100000"), 100_000.0),
        (Fraction(5, 2), 2.5),
    ],
)
def test_coerce_amount(raw, expected: float) -> None:
    assert coerce_amount(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (True, True),
        (False, False),
        ("true", True),
        ("TRUE", True),
        ("on", True),
        ("yes", True),
        ("1", True),
        (1, True),
        ("false", False),
        ("off", False),
        ("", False),
        (None, False),
        (0, False),
        ("metro", False),
    ],
)
def test_coerce_flag(raw, expected: bool) -> None:
    assert coerce_flag(raw) is expected


# ===========================================================================
# normalize_inputs / TaxInputs
# ===========================================================================

def test_normalize_inputs_wire_names() -> None:
    inputs = normalize_inputs({
        "age": "60to80",
        "grossSalary": "1500000",
        "deduction80c": 150_000,
        "deduction80d": "",
        "npsContribution": "abc",
        "homeLoanInterest": -10,
        "deduction80tta": None,
        "basicSalary": "600000",
        "hraReceived": 200_000,
        "rentPaid": "240000",
        "livesInMetro": "true",
    })
    assert inputs.age_group is AgeGroup.sixty_to_80
    assert inputs.gross_salary == 1_500_000
    assert inputs.deduction_80c == 150_000
    assert inputs.deduction_80d == 0
    assert inputs.nps_contribution == 0
    assert inputs.home_loan_interest == 0
    assert inputs.deduction_80tta == 0
    assert inputs.basic_salary == 600_000
    assert inputs.hra_received == 200_000
    assert inputs.rent_paid == 240_000
    assert inputs.lives_in_metro is True


def test_normalize_inputs_snake_case_names() -> None:
    inputs = normalize_inputs({"age_group": "above80", "gross_salary": 900_000, "lives_in_metro": True})
    assert inputs.age_group is AgeGroup.above80
    assert inputs.gross_salary == 900_000
    assert inputs.lives_in_metro is True


def test_normalize_inputs_empty_mapping_is_all_zero() -> None:
    for raw in (None, {}):
        inputs = normalize_inputs(raw)
        assert inputs == TaxInputs()
        assert inputs.age_group is AgeGroup.below60
        assert inputs.gross_salary == 0
        assert inputs.lives_in_metro is False


def test_normalize_inputs_ignores_unknown_keys() -> None:
    inputs = normalize_inputs({"grossSalary": 100, "favouriteColour": "blue"})
    assert inputs.gross_salary == 100


def test_normalize_inputs_out_of_range_amounts_become_zero() -> None:
    inputs = normalize_inputs({
        "grossSalary": 10 ** 400,
        "deduction80c": Decimal("150000"),
        "rentPaid": "2_40_000",
    })
    assert inputs.gross_salary == 0
    assert inputs.deduction_80c == 150_000
    assert inputs.rent_paid == 0


@pytest.mark.parametrize("blank", [None, "", "  "])
def test_blank_age_group_defaults_to_below60(blank) -> None:
    assert normalize_inputs({"ageGroup": blank}).age_group is AgeGroup.below60


@pytest.mark.parametrize("bad", ["teen", "60-80", "BELOW60", 60])
def test_unknown_age_group_is_rejected(bad) -> None:
    """Closed enum — an unknown tag fails fast, before any computation."""
    with pytest.raises(ValueError):
        normalize_inputs({"ageGroup": bad, "grossSalary": 1_000_000})


def test_unknown_age_group_raises_validation_error() -> None:
    with pytest.raises(ValidationError) as exc_info:
        TaxInputs.model_validate({"age": "teen"})
    assert exc_info.value.error_count() == 1


def test_tax_inputs_is_immutable() -> None:
    inputs = normalize_inputs({"grossSalary": 100})
    with pytest.raises(ValidationError):
        inputs.gross_salary = 200  # type: ignore[misc]


def test_tax_inputs_serializes_wire_names() -> None:
    dumped = normalize_inputs({"grossSalary": 100, "livesInMetro": True}).model_dump(by_alias=True)
    assert dumped["ageGroup"] == AgeGroup.below60
    assert dumped["grossSalary"] == 100
    assert dumped["livesInMetro"] is True
    assert "deduction80tta" in dumped
