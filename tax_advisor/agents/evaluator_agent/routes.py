"""
EvaluatorAgent HTTP routes — POST /api/calculate,
                              POST /api/calculate/detailed,
                              POST /api/advice,
                              GET  /api/tax-tables/{fiscal_year}

Thin transport over tax_engine: parse TaxInputs (normalization happens in the
model validators), run the engine with the configured TaxTables, return JSON.

POST /api/advice keeps the tax form's contract:
  request  {"inputs": {...form fields...}}
  response {"success": true, "results": {...TaxResults...}, "advice": null}
Advice narration is produced elsewhere; this service always returns null.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from tax_advisor.agents.evaluator_agent.tax_engine import compute_tax_detailed
from tax_advisor.agents.evaluator_agent.tax_tables import (
    TAX_TABLES,
    TaxTables,
    load_tax_tables,
)
from tax_advisor.agents.input_agent.schemas import AdviceRequest, TaxInputs
from tax_advisor.config import settings

router = APIRouter(prefix="/api", tags=["evaluator_agent"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_tax_tables() -> TaxTables:
    """Configured TaxTables, loaded once. Override in tests via app.dependency_overrides."""
    tables = load_tax_tables(settings.fiscal_year, settings.tax_tables_file or None)
    logger.info("Tax tables in use fiscal_year=%s", tables.fiscal_year)
    return tables


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/calculate")
async def calculate_tax(
    inputs: TaxInputs,
    tables: TaxTables = Depends(get_tax_tables),
) -> JSONResponse:
    """
    Compare both regimes for the posted inputs.

    Body: TaxInputs (camelCase wire names or snake_case).
    Returns: TaxResults — oldRegimeTax, newRegimeTax, savings, recommendedRegime.
    """
    computation = compute_tax_detailed(inputs, tables)
    result = computation.results

    # Log only the outcome — no salary or deduction values
    logger.info(
        "Tax calculated fiscal_year=%s recommended=%s",
        computation.fiscal_year,
        result.recommended_regime.value,
    )
    return JSONResponse(status_code=200, content=result.model_dump(mode="json", by_alias=True))


@router.post("/calculate/detailed")
async def calculate_tax_detailed(
    inputs: TaxInputs,
    tables: TaxTables = Depends(get_tax_tables),
) -> JSONResponse:
    """Same as /calculate, plus per-regime taxable income, deductions, rebate and cess."""
    computation = compute_tax_detailed(inputs, tables)
    logger.info(
        "Detailed tax calculated fiscal_year=%s recommended=%s",
        computation.fiscal_year,
        computation.results.recommended_regime.value,
    )
    return JSONResponse(status_code=200, content=computation.model_dump(mode="json", by_alias=True))


@router.post("/advice")
async def advice(
    request_body: AdviceRequest,
    tables: TaxTables = Depends(get_tax_tables),
) -> JSONResponse:
    """Form endpoint. Computes TaxResults; advice is left null for the presentation layer."""
    result = compute_tax_detailed(request_body.inputs, tables).results
    logger.info("Advice request served recommended=%s", result.recommended_regime.value)
    return JSONResponse(
        status_code=200,
        content={
            "success": True,
            "results": result.model_dump(mode="json", by_alias=True),
            "advice": None,
        },
    )


@router.get("/tax-tables/{fiscal_year}")
async def get_tax_tables_for_year(fiscal_year: str) -> JSONResponse:
    """Return a built-in statutory table (slabs, caps, rebate ceilings)."""
    tables = TAX_TABLES.get(fiscal_year)
    if tables is None:
        raise HTTPException(
            status_code=404,
            detail=(
                f"Fiscal year '{fiscal_year}' not found. "
                f"Available: {', '.join(sorted(TAX_TABLES))}"
            ),
        )
    return JSONResponse(status_code=200, content=tables.model_dump(mode="json"))
