"""
InputAgent normalizer — turns raw form values into a TaxInputs record.

The form posts whatever the user typed: empty strings, "abc", "-500",
numbers, or nothing at all. The engine must never see any of that, and
normalization must never fail for an amount. Rules:

  1. None / missing            → 0
  2. bool                      → 0 (a checkbox is not an amount)
  3. int / float / Decimal /    → value, if finite and >= 0, else 0
     Fraction                    (too large for a float → 0)
  4. str                       → float(value.strip()) with rule 3 applied, else 0
                                 ("1_000" is rejected like the form's Number())
  5. anything else             → 0

livesInMetro accepts a real bool or a truthy token ("true", "1", "yes", "on").

The ONLY rejected input is an unknown age group (closed set). That is a
caller contract violation and surfaces as ValueError from TaxInputs.

coerce_amount() / coerce_flag() are called by the TaxInputs field validators,
so every construction path normalizes the same way.
"""
from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from tax_advisor.agents.input_agent.schemas import TaxInputs

logger = logging.getLogger(__name__)

_TRUTHY_TOKENS = frozenset({"true", "1", "yes", "on", "y"})


def coerce_amount(value: Any, field_name: Optional[str] = None) -> float:
    """
    Coerce one raw amount to a finite, non-negative float.

    Never raises. Only the field name is logged when a value is dropped —
    amounts are never written to logs.
    """
    if value is None:
        return 0.0

    if isinstance(value, bool):
        amount = None
    elif isinstance(value, (numbers.Real, Decimal)):
        try:
            amount = float(value)
        except (OverflowError, ValueError):
            # int beyond float range, or Decimal("sNaN")
            amount = None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "_" in text:
            amount = None
        else:
            try:
                amount = float(text)
            except ValueError:
                amount = None
    else:
        amount = None

    if amount is None or not math.isfinite(amount) or amount < 0:
        logger.debug("Coerced unusable amount to 0 field=%s", field_name)
        return 0.0
    return amount


def coerce_flag(value: Any) -> bool:
    """Coerce a checkbox-style value to bool. Unknown tokens are False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_TOKENS
    return False


def normalize_inputs(raw: Mapping[str, Any] | None) -> "TaxInputs":
    """
    Build a TaxInputs from a raw mapping of form values.

    Accepts wire names (grossSalary, age/ageGroup, ...) or snake_case names.
    Unknown keys are ignored.

    Raises:
        ValueError: if the age group is present but not one of
            below60 / 60to80 / above80.
    """
    # Local import — schemas imports the coercion helpers from this module
    from tax_advisor.agents.input_agent.schemas import TaxInputs

    return TaxInputs.model_validate(dict(raw or {}))
